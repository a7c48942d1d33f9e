"""Review engine: the approval state machine for pending changes.

States are ``pending -> approved | rejected``; both outcomes are terminal.
The transition is a single conditional UPDATE guarded on ``status =
'pending'`` so that two admins reviewing the same change concurrently cannot
both win. Applying an approved change to the catalog is the caller's job
(see ``change_applier``); this module only manages the approval record.
"""
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog_admin.core.database import commit_or_raise
from catalog_admin.core.exceptions import (
    InvalidState,
    NotFound,
    StorageFailure,
    ValidationError,
)
from catalog_admin.core.roles import ChangeStatus, REVIEW_DECISIONS, ensure_can_review
from catalog_admin.core.time import utc_now
from catalog_admin.models.pending_change import PendingChange
from catalog_admin.models.user import User
from catalog_admin.services import pending_changes
from catalog_admin.services.audit import RequestContext, record_audit


def _parse_decision(decision: ChangeStatus | str) -> ChangeStatus:
    try:
        parsed = ChangeStatus(decision)
    except ValueError:
        parsed = None
    if parsed not in REVIEW_DECISIONS:
        raise ValidationError("Review decision must be 'approved' or 'rejected'")
    return parsed


def _transition(
    db: Session,
    change_id: str,
    reviewer_id: str,
    decision: ChangeStatus,
    notes: Optional[str],
) -> int:
    """Move a pending change to ``decision``. Returns the number of rows updated."""
    now = utc_now()
    stmt = (
        update(PendingChange)
        .where(
            PendingChange.id == change_id,
            PendingChange.status == ChangeStatus.PENDING.value,
        )
        .values(
            status=decision.value,
            reviewed_by=reviewer_id,
            reviewed_at=now,
            review_notes=notes,
            updated_at=now,
        )
        .execution_options(synchronize_session=False)
    )
    try:
        return db.execute(stmt).rowcount
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageFailure() from exc


def review(
    db: Session,
    change_id: str,
    reviewer: User,
    decision: ChangeStatus | str,
    notes: Optional[str] = None,
    context: Optional[RequestContext] = None,
) -> PendingChange:
    """
    Approve or reject a pending change.

    Raises:
        PolicyViolation: If the reviewer is not an admin.
        ValidationError: If the decision is not approved/rejected.
        NotFound: If no change with this id exists.
        InvalidState: If the change has already been reviewed. The stored
            record is left untouched.
    """
    ensure_can_review(reviewer)
    decision = _parse_decision(decision)

    if _transition(db, change_id, reviewer.id, decision, notes) == 0:
        db.rollback()
        if pending_changes.get_by_id(db, change_id) is None:
            raise NotFound("Pending change not found")
        raise InvalidState("This change has already been reviewed")

    commit_or_raise(db, "pending change review")
    reviewed = pending_changes.get_by_id(db, change_id)

    record_audit(
        db,
        user_id=reviewer.id,
        action=REVIEW_DECISIONS[decision],
        resource_type=pending_changes.PENDING_CHANGE_RESOURCE,
        resource_id=change_id,
        details={
            "original_action": reviewed.action,
            "target_resource": reviewed.resource_type,
            "review_notes": notes,
        },
        context=context,
    )
    return reviewed
