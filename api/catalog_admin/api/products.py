"""Product routes. Reads are public; writes are admin only.

Editors change products through ``/pending-changes`` instead.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from catalog_admin.core.database import get_db
from catalog_admin.core.deps import require_admin
from catalog_admin.core.exceptions import NotFound
from catalog_admin.core.roles import ActionType
from catalog_admin.models.product import Product
from catalog_admin.models.user import User
from catalog_admin.schemas.catalog import (
    ActiveToggle,
    FeaturedToggle,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from catalog_admin.schemas.common import DataResponse, ListResponse, MessageResponse
from catalog_admin.services import catalog
from catalog_admin.services.audit import RequestContext, get_request_context, record_audit

router = APIRouter()


@router.get("/", response_model=ListResponse[ProductResponse])
def list_products(
    include_inactive: bool = Query(False, description="Include deactivated products"),
    subcategory_id: Optional[str] = Query(None, description="Only products of this subcategory"),
    featured: bool = Query(False, description="Only active featured products"),
    limit: int = Query(10, ge=1, le=100, description="Maximum featured products returned"),
    db: Session = Depends(get_db),
):
    if featured:
        products = catalog.list_featured_products(db, limit=limit)
    else:
        products = catalog.list_entities(
            db, Product, include_inactive=include_inactive, subcategory_id=subcategory_id)
    return {"data": products, "total": len(products)}


@router.get("/slug/{slug}", response_model=DataResponse[ProductResponse])
def get_product_by_slug(slug: str, db: Session = Depends(get_db)):
    product = catalog.get_by_slug(db, Product, slug)
    if not product:
        raise NotFound("Product not found")
    return {"data": product}


@router.get("/{product_id}", response_model=DataResponse[ProductResponse])
def get_product(product_id: str, db: Session = Depends(get_db)):
    return {"data": catalog.get_or_404(db, Product, product_id)}


@router.post("/", response_model=DataResponse[ProductResponse])
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    product = catalog.create(db, Product, product_data.model_dump(exclude_none=True))
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.CREATE,
        resource_type="product",
        resource_id=product.id,
        details={
            "name": product.name,
            "slug": product.slug,
            "subcategory_id": product.subcategory_id
        },
        context=context,
    )
    return {"message": "Product created successfully", "data": product}


@router.patch("/{product_id}", response_model=DataResponse[ProductResponse])
def update_product(
    product_id: str,
    product_data: ProductUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    changes = product_data.model_dump(exclude_unset=True)
    product = catalog.update(db, Product, product_id, changes)
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="product",
        resource_id=product_id,
        details=changes,
        context=context,
    )
    return {"message": "Product updated successfully", "data": product}


@router.patch("/{product_id}/toggle", response_model=MessageResponse)
def toggle_product(
    product_id: str,
    toggle: ActiveToggle,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    catalog.set_flag(db, Product, product_id, "is_active", toggle.is_active)
    verb = "activated" if toggle.is_active else "deactivated"
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="product",
        resource_id=product_id,
        details={"action": verb},
        context=context,
    )
    return {"message": f"Product {verb} successfully"}


@router.patch("/{product_id}/featured", response_model=MessageResponse)
def toggle_product_featured(
    product_id: str,
    toggle: FeaturedToggle,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    catalog.set_flag(db, Product, product_id, "is_featured", toggle.is_featured)
    verb = "featured" if toggle.is_featured else "unfeatured"
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="product",
        resource_id=product_id,
        details={"action": verb},
        context=context,
    )
    return {"message": f"Product {verb} successfully"}


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    deleted = catalog.delete(db, Product, product_id)
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.DELETE,
        resource_type="product",
        resource_id=product_id,
        details={"name": deleted["name"]},
        context=context,
    )
    return {"message": "Product deleted successfully"}
