"""User schemas."""
from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserBase(BaseModel):
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(min_length=6)
    # Admin accounts are only created by the seed and create_admin scripts
    role: Literal["editor"] = "editor"


class UserRoleUpdate(BaseModel):
    role: Literal["editor"]


class UserActiveUpdate(BaseModel):
    is_active: bool


class UserResponse(UserBase):
    id: str
    role: str
    is_active: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class UserBrief(BaseModel):
    id: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class MeResponse(UserBrief):
    capabilities: dict


class Token(BaseModel):
    access_token: str
    token_type: str
    user: UserBrief


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)
