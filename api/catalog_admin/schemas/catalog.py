"""Category, subcategory and product schemas."""
from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class CategoryBase(BaseModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    display_order: Optional[str] = None


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    display_order: Optional[str] = None


class CategoryResponse(CategoryBase):
    id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubcategoryCreate(CategoryBase):
    category_id: str = Field(min_length=1)


class SubcategoryUpdate(CategoryUpdate):
    category_id: Optional[str] = Field(default=None, min_length=1)


class SubcategoryResponse(CategoryResponse):
    category_id: str


class ProductCreate(BaseModel):
    subcategory_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    description: Optional[str] = None
    short_description: Optional[str] = None
    price: Optional[str] = None
    images: Optional[List[str]] = None
    specifications: Optional[Any] = None
    features: Optional[List[str]] = None
    display_order: Optional[str] = None
    is_featured: Optional[bool] = None


class ProductUpdate(BaseModel):
    subcategory_id: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    short_description: Optional[str] = None
    price: Optional[str] = None
    images: Optional[List[str]] = None
    specifications: Optional[Any] = None
    features: Optional[List[str]] = None
    display_order: Optional[str] = None
    is_featured: Optional[bool] = None


class ProductResponse(BaseModel):
    id: str
    subcategory_id: str
    name: str
    slug: str
    description: Optional[str] = None
    short_description: Optional[str] = None
    price: Optional[str] = None
    images: Optional[List[str]] = None
    specifications: Optional[Any] = None
    features: Optional[List[str]] = None
    display_order: Optional[str] = None
    is_active: bool
    is_featured: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ActiveToggle(BaseModel):
    is_active: bool


class FeaturedToggle(BaseModel):
    is_featured: bool
