"""Category routes. Reads are public; writes are admin only."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from catalog_admin.core.database import get_db
from catalog_admin.core.deps import require_admin
from catalog_admin.core.exceptions import NotFound
from catalog_admin.core.roles import ActionType
from catalog_admin.models.category import Category
from catalog_admin.models.user import User
from catalog_admin.schemas.catalog import ActiveToggle, CategoryCreate, CategoryResponse, CategoryUpdate
from catalog_admin.schemas.common import DataResponse, ListResponse, MessageResponse
from catalog_admin.services import catalog
from catalog_admin.services.audit import RequestContext, get_request_context, record_audit

router = APIRouter()


@router.get("/", response_model=ListResponse[CategoryResponse])
def list_categories(
    include_inactive: bool = Query(False, description="Include deactivated categories"),
    db: Session = Depends(get_db),
):
    categories = catalog.list_entities(db, Category, include_inactive=include_inactive)
    return {"data": categories, "total": len(categories)}


@router.get("/slug/{slug}", response_model=DataResponse[CategoryResponse])
def get_category_by_slug(slug: str, db: Session = Depends(get_db)):
    category = catalog.get_by_slug(db, Category, slug)
    if not category:
        raise NotFound("Category not found")
    return {"data": category}


@router.get("/{category_id}", response_model=DataResponse[CategoryResponse])
def get_category(category_id: str, db: Session = Depends(get_db)):
    return {"data": catalog.get_or_404(db, Category, category_id)}


@router.post("/", response_model=DataResponse[CategoryResponse])
def create_category(
    category_data: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    category = catalog.create(db, Category, category_data.model_dump(exclude_none=True))
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.CREATE,
        resource_type="category",
        resource_id=category.id,
        details={"name": category.name, "slug": category.slug},
        context=context,
    )
    return {"message": "Category created successfully", "data": category}


@router.patch("/{category_id}", response_model=DataResponse[CategoryResponse])
def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    changes = category_data.model_dump(exclude_unset=True)
    category = catalog.update(db, Category, category_id, changes)
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="category",
        resource_id=category_id,
        details=changes,
        context=context,
    )
    return {"message": "Category updated successfully", "data": category}


@router.patch("/{category_id}/toggle", response_model=MessageResponse)
def toggle_category(
    category_id: str,
    toggle: ActiveToggle,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    catalog.set_flag(db, Category, category_id, "is_active", toggle.is_active)
    verb = "activated" if toggle.is_active else "deactivated"
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.UPDATE,
        resource_type="category",
        resource_id=category_id,
        details={"action": verb},
        context=context,
    )
    return {"message": f"Category {verb} successfully"}


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    """Delete a category together with its subcategories and products."""
    deleted = catalog.delete(db, Category, category_id)
    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.DELETE,
        resource_type="category",
        resource_id=category_id,
        details={"name": deleted["name"]},
        context=context,
    )
    return {"message": "Category deleted successfully"}
