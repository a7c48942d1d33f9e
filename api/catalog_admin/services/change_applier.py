"""Apply approved pending changes to the catalog.

Runs after the review has committed, so a failure here never reverts the
approval: the pending change stays ``approved`` and the error is reported
back to the reviewer.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from sqlalchemy.orm import Session

from catalog_admin.core.exceptions import CatalogAdminError, InvalidState, ValidationError
from catalog_admin.core.roles import ActionType, ChangeStatus
from catalog_admin.models.category import Category, Subcategory
from catalog_admin.models.pending_change import PendingChange
from catalog_admin.models.product import Product
from catalog_admin.models.user import User
from catalog_admin.schemas.catalog import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
    SubcategoryCreate,
    SubcategoryUpdate,
)
from catalog_admin.services import catalog
from catalog_admin.services.audit import RequestContext, record_audit

logger = logging.getLogger(__name__)

# (create schema, update schema) used to validate change_data at apply time
CHANGE_SCHEMAS = {
    Category: (CategoryCreate, CategoryUpdate),
    Subcategory: (SubcategoryCreate, SubcategoryUpdate),
    Product: (ProductCreate, ProductUpdate),
}


@dataclass
class ApplyResult:
    applied: bool
    resource_id: Optional[str] = None
    error: Optional[str] = None


def _validated_payload(model, action: ActionType, change_data) -> dict:
    create_schema, update_schema = CHANGE_SCHEMAS[model]
    schema = create_schema if action == ActionType.CREATE else update_schema
    if not isinstance(change_data, dict):
        raise ValidationError("change_data must be an object")
    try:
        payload = schema.model_validate(change_data)
    except PydanticValidationError as exc:
        raise ValidationError(f"Invalid change_data: {exc.errors()[0]['msg']}") from exc
    # Explicit nulls in an update clear the field
    if action == ActionType.UPDATE:
        return payload.model_dump(exclude_unset=True)
    return payload.model_dump(exclude_none=True)


def _apply(db: Session, change: PendingChange) -> tuple[str, dict]:
    model = catalog.model_for(change.resource_type)
    action = ActionType(change.action)

    if action == ActionType.CREATE:
        entity = catalog.create(db, model, _validated_payload(model, action, change.change_data))
        return entity.id, {"name": entity.name, "slug": entity.slug}

    if not change.resource_id:
        raise ValidationError(f"resource_id is required to {action.value} a {change.resource_type}")

    if action == ActionType.UPDATE:
        payload = _validated_payload(model, action, change.change_data)
        catalog.update(db, model, change.resource_id, payload)
        return change.resource_id, payload

    values = catalog.delete(db, model, change.resource_id)
    return change.resource_id, {"name": values.get("name")}


def apply_approved_change(
    db: Session,
    change: PendingChange,
    actor: User,
    context: Optional[RequestContext] = None,
) -> ApplyResult:
    """
    Carry out the mutation described by an approved pending change.

    Errors from the catalog layer are caught and returned in the result; the
    successful mutation is audited as a create/update/delete of the target
    resource on behalf of the approving admin.
    """
    if change.status != ChangeStatus.APPROVED.value:
        raise InvalidState("Only approved changes can be applied")

    try:
        resource_id, details = _apply(db, change)
    except CatalogAdminError as exc:
        logger.warning(
            f"Approved pending change {change.id} could not be applied "
            f"to {change.resource_type} {change.resource_id}: {exc.detail}"
        )
        return ApplyResult(applied=False, resource_id=change.resource_id, error=exc.detail)

    record_audit(
        db,
        user_id=actor.id,
        action=change.action,
        resource_type=change.resource_type,
        resource_id=resource_id,
        details={"approved_pending_change_id": change.id, **details},
        context=context,
    )
    return ApplyResult(applied=True, resource_id=resource_id)
