"""Pending change store.

Persists changes proposed by editors and exposes them for review. Admins
never submit here; the role gate rejects them before anything is stored.
"""
from typing import Any, List, Optional

from sqlalchemy.orm import Session, joinedload

from catalog_admin.core.database import commit_or_raise
from catalog_admin.core.exceptions import ValidationError
from catalog_admin.core.roles import (
    ActionType,
    ChangeStatus,
    CHANGE_ACTIONS,
    ensure_can_submit,
)
from catalog_admin.models.pending_change import PendingChange
from catalog_admin.models.user import User
from catalog_admin.services.audit import RequestContext, record_audit

PENDING_CHANGE_RESOURCE = "pending_change"


def _base_query(db: Session):
    return db.query(PendingChange).options(
        joinedload(PendingChange.submitted_by),
        joinedload(PendingChange.reviewer),
    )


def submit(
    db: Session,
    user: User,
    action: ActionType | str,
    resource_type: str,
    change_data: Any,
    resource_id: Optional[str] = None,
    previous_data: Optional[Any] = None,
    context: Optional[RequestContext] = None,
) -> PendingChange:
    """
    Store a proposed change for admin review.

    The shape of ``change_data`` is not validated here; callers validate
    payloads before submitting.

    Raises:
        PolicyViolation: If the submitting user is an admin.
        ValidationError: If the action is not create, update or delete.
    """
    ensure_can_submit(user)

    try:
        action = ActionType(action)
    except ValueError:
        action = None
    if action not in CHANGE_ACTIONS:
        raise ValidationError("Change action must be one of: create, update, delete")

    pending_change = PendingChange(
        user_id=user.id,
        action=action.value,
        resource_type=resource_type,
        resource_id=resource_id,
        change_data=change_data,
        previous_data=previous_data,
        status=ChangeStatus.PENDING.value,
    )
    db.add(pending_change)
    commit_or_raise(db, "pending change submission")
    db.refresh(pending_change)

    record_audit(
        db,
        user_id=user.id,
        action=ActionType.CREATE,
        resource_type=PENDING_CHANGE_RESOURCE,
        resource_id=pending_change.id,
        details={"change_type": action.value, "target_resource": resource_type},
        context=context,
    )
    return pending_change


def get_by_id(db: Session, change_id: str) -> Optional[PendingChange]:
    return _base_query(db).filter(PendingChange.id == change_id).first()


def list_by_status(db: Session, status: ChangeStatus | str) -> List[PendingChange]:
    """List changes with the given status, newest first."""
    try:
        status = ChangeStatus(status)
    except ValueError:
        raise ValidationError("Invalid status")
    return _base_query(db).filter(
        PendingChange.status == status.value
    ).order_by(PendingChange.created_at.desc()).all()


def list_pending(db: Session) -> List[PendingChange]:
    return list_by_status(db, ChangeStatus.PENDING)


def list_by_identity(db: Session, user_id: str) -> List[PendingChange]:
    """List every change submitted by a user regardless of status, newest first."""
    return _base_query(db).filter(
        PendingChange.user_id == user_id
    ).order_by(PendingChange.created_at.desc()).all()


def delete(db: Session, change_id: str) -> bool:
    """Purge a pending change in any status. Returns False if it did not exist."""
    deleted = db.query(PendingChange).filter(
        PendingChange.id == change_id
    ).delete(synchronize_session=False)
    commit_or_raise(db, "pending change purge")
    return deleted > 0
