"""Subcategory routes. Reads are public; writes are admin only."""
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from catalog_admin.core.database import get_db
from catalog_admin.core.deps import require_admin
from catalog_admin.core.exceptions import NotFound
from catalog_admin.core.roles import ActionType
from catalog_admin.models.category import Subcategory
from catalog_admin.models.user import User
from catalog_admin.schemas.catalog import ActiveToggle, SubcategoryCreate, SubcategoryResponse, SubcategoryUpdate
from catalog_admin.schemas.common import DataResponse, ListResponse, MessageResponse
from catalog_admin.services import catalog
from catalog_admin.services.audit import RequestContext, get_request_context, record_audit

router = APIRouter()


@router.get("/", response_model=ListResponse[SubcategoryResponse])
def list_subcategories(
    include_inactive: bool = Query(False, description="Include deactivated subcategories"),
    category_id: Optional[str] = Query(None, description="Only subcategories of this category"),
    db: Session = Depends(get_db),
):
    subcategories = catalog.list_entities(
        db, Subcategory, include_inactive=include_inactive, category_id=category_id)
    return {"data": subcategories, "total": len(subcategories)}


@router.get("/slug/{slug}", response_model=DataResponse[SubcategoryResponse])
def get_subcategory_by_slug(slug: str, db: Session = Depends(get_db)):
    subcategory = catalog.get_by_slug(db, Subcategory, slug)
    if not subcategory:
        raise NotFound("Subcategory not found")
    return {"data": subcategory}


@router.get("/{subcategory_id}", response_model=DataResponse[SubcategoryResponse])
def get_subcategory(subcategory_id: str, db: Session = Depends(get_db)):
    return {"data": catalog.get_or_404(db, Subcategory, subcategory_id)}


@router.post("/", response_model=DataResponse[SubcategoryResponse])
def create_subcategory(
    subcategory_data: SubcategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    subcategory = catalog.create(db, Subcategory, subcategory_data.model_dump(exclude_none=True))
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.CREATE,
        resource_type="subcategory",
        resource_id=subcategory.id,
        details={"name": subcategory.name, "slug": subcategory.slug},
        context=context,
    )
    return {"message": "Subcategory created successfully", "data": subcategory}


@router.patch("/{subcategory_id}", response_model=DataResponse[SubcategoryResponse])
def update_subcategory(
    subcategory_id: str,
    subcategory_data: SubcategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    changes = subcategory_data.model_dump(exclude_unset=True)
    subcategory = catalog.update(db, Subcategory, subcategory_id, changes)
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="subcategory",
        resource_id=subcategory_id,
        details=changes,
        context=context,
    )
    return {"message": "Subcategory updated successfully", "data": subcategory}


@router.patch("/{subcategory_id}/toggle", response_model=MessageResponse)
def toggle_subcategory(
    subcategory_id: str,
    toggle: ActiveToggle,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    catalog.set_flag(db, Subcategory, subcategory_id, "is_active", toggle.is_active)
    verb = "activated" if toggle.is_active else "deactivated"
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="subcategory",
        resource_id=subcategory_id,
        details={"action": verb},
        context=context,
    )
    return {"message": f"Subcategory {verb} successfully"}


@router.delete("/{subcategory_id}", response_model=MessageResponse)
def delete_subcategory(
    subcategory_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    """Delete a subcategory together with its products."""
    deleted = catalog.delete(db, Subcategory, subcategory_id)
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.DELETE,
        resource_type="subcategory",
        resource_id=subcategory_id,
        details={"name": deleted["name"]},
        context=context,
    )
    return {"message": "Subcategory deleted successfully"}
