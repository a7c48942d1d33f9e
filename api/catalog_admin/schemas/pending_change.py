"""Pending change schemas."""
from datetime import datetime
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict
from catalog_admin.schemas.user import UserBrief


class PendingChangeCreate(BaseModel):
    action: Literal["create", "update", "delete"]
    resource_type: str
    resource_id: Optional[str] = None
    change_data: Any
    previous_data: Optional[Any] = None


class PendingChangeReview(BaseModel):
    status: Literal["approved", "rejected"]
    review_notes: Optional[str] = None


class PendingChangeResponse(BaseModel):
    id: str
    user_id: str
    action: str
    resource_type: str
    resource_id: Optional[str] = None
    change_data: Any
    previous_data: Optional[Any] = None
    status: str
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    submitted_by: Optional[UserBrief] = None
    reviewer: Optional[UserBrief] = None

    model_config = ConfigDict(from_attributes=True)


class ReviewResponse(BaseModel):
    success: bool = True
    message: str
    data: PendingChangeResponse
    # Outcome of applying an approved change to the catalog; None for rejections
    applied: Optional[bool] = None
    apply_error: Optional[str] = None
