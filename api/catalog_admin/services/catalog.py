"""Catalog persistence for categories, subcategories and products.

Plain create/read/update/delete helpers shared by the admin routes and by
the applier that carries out approved pending changes. Slug uniqueness and
parent existence are enforced here.
"""
from typing import List, Optional, Type, Union

from sqlalchemy.orm import Session

from catalog_admin.core.database import commit_or_raise
from catalog_admin.core.exceptions import NotFound, ValidationError
from catalog_admin.models.category import Category, Subcategory
from catalog_admin.models.product import Product

CatalogEntity = Union[Category, Subcategory, Product]

RESOURCE_MODELS = {
    "category": Category,
    "subcategory": Subcategory,
    "product": Product,
}

# Foreign key each resource must reference, and the model it points to
PARENT_KEYS = {
    Subcategory: ("category_id", Category),
    Product: ("subcategory_id", Subcategory),
}


def model_for(resource_type: str) -> Type[CatalogEntity]:
    model = RESOURCE_MODELS.get(resource_type)
    if model is None:
        raise ValidationError(f"Unsupported resource type '{resource_type}'")
    return model


def _label(model: Type[CatalogEntity]) -> str:
    return model.__name__


def get(db: Session, model: Type[CatalogEntity], entity_id: str) -> Optional[CatalogEntity]:
    return db.query(model).filter(model.id == entity_id).first()


def get_or_404(db: Session, model: Type[CatalogEntity], entity_id: str) -> CatalogEntity:
    entity = get(db, model, entity_id)
    if entity is None:
        raise NotFound(f"{_label(model)} not found")
    return entity


def get_by_slug(db: Session, model: Type[CatalogEntity], slug: str) -> Optional[CatalogEntity]:
    return db.query(model).filter(model.slug == slug).first()


def list_entities(
    db: Session,
    model: Type[CatalogEntity],
    include_inactive: bool = False,
    **filters,
) -> List[CatalogEntity]:
    """List entities ordered by display order, optionally filtered by column values."""
    query = db.query(model)
    for column, value in filters.items():
        if value is not None:
            query = query.filter(getattr(model, column) == value)
    if not include_inactive:
        query = query.filter(model.is_active == True)
    return query.order_by(model.display_order.desc()).all()


def list_featured_products(db: Session, limit: int = 10) -> List[Product]:
    return db.query(Product).filter(
        Product.is_featured == True,
        Product.is_active == True
    ).order_by(Product.display_order.desc()).limit(limit).all()


def _check_slug(db: Session, model: Type[CatalogEntity], slug: Optional[str], entity_id: Optional[str] = None):
    if not slug:
        return
    existing = get_by_slug(db, model, slug)
    if existing and existing.id != entity_id:
        raise ValidationError(f"{_label(model)} with this slug already exists")


def _check_nulls(model: Type[CatalogEntity], data: dict):
    columns = model.__table__.columns
    for field, value in data.items():
        if value is None and not columns[field].nullable:
            raise ValidationError(f"{field} cannot be null")


def _check_parent(db: Session, model: Type[CatalogEntity], data: dict):
    if model not in PARENT_KEYS:
        return
    key, parent_model = PARENT_KEYS[model]
    if key in data and get(db, parent_model, data[key]) is None:
        raise ValidationError(f"{_label(parent_model)} not found")


def create(db: Session, model: Type[CatalogEntity], data: dict) -> CatalogEntity:
    _check_slug(db, model, data.get("slug"))
    _check_parent(db, model, data)
    entity = model(**data)
    db.add(entity)
    commit_or_raise(db, f"{_label(model)} create")
    db.refresh(entity)
    return entity


def update(db: Session, model: Type[CatalogEntity], entity_id: str, data: dict) -> CatalogEntity:
    """Apply ``data`` to an entity. A None value clears a nullable column."""
    _check_nulls(model, data)
    entity = get_or_404(db, model, entity_id)
    _check_slug(db, model, data.get("slug"), entity_id)
    _check_parent(db, model, data)
    for field, value in data.items():
        setattr(entity, field, value)
    commit_or_raise(db, f"{_label(model)} update")
    db.refresh(entity)
    return entity


def set_flag(db: Session, model: Type[CatalogEntity], entity_id: str, flag: str, value: bool) -> CatalogEntity:
    """Set ``is_active`` or ``is_featured`` on an entity."""
    return update(db, model, entity_id, {flag: value})


def delete(db: Session, model: Type[CatalogEntity], entity_id: str) -> dict:
    """Delete an entity (children cascade). Returns its values before deletion."""
    entity = get_or_404(db, model, entity_id)
    values = snapshot(entity)
    db.delete(entity)
    commit_or_raise(db, f"{_label(model)} delete")
    return values


def snapshot(entity: CatalogEntity) -> dict:
    """Column values of an entity, suitable for ``previous_data``."""
    values = {}
    for column in entity.__table__.columns:
        value = getattr(entity, column.key)
        values[column.key] = value.isoformat() if hasattr(value, "isoformat") else value
    return values
