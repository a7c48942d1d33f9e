"""Pending change routes (approval workflow).

Editors submit proposed catalog changes here; admins review them. Approved
changes are applied to the catalog after the review is recorded.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from catalog_admin.core.database import get_db
from catalog_admin.core.deps import get_current_user, require_admin
from catalog_admin.core.exceptions import NotFound
from catalog_admin.core.roles import ActionType, ChangeStatus, is_admin
from catalog_admin.models.user import User
from catalog_admin.schemas.common import DataResponse, ListResponse, MessageResponse
from catalog_admin.schemas.pending_change import (
    PendingChangeCreate,
    PendingChangeResponse,
    PendingChangeReview,
    ReviewResponse,
)
from catalog_admin.services import pending_changes, review as review_engine
from catalog_admin.services.audit import RequestContext, get_request_context, record_audit
from catalog_admin.services.change_applier import apply_approved_change

router = APIRouter()


@router.post("/", response_model=DataResponse[PendingChangeResponse])
def submit_pending_change(
    change_data: PendingChangeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    context: RequestContext = Depends(get_request_context),
):
    """Submit a change for admin approval. Admins apply changes directly instead."""
    pending_change = pending_changes.submit(
        db,
        current_user,
        action=change_data.action,
        resource_type=change_data.resource_type,
        resource_id=change_data.resource_id,
        change_data=change_data.change_data,
        previous_data=change_data.previous_data,
        context=context,
    )
    return {"message": "Change submitted for approval", "data": pending_change}


@router.get("/pending", response_model=ListResponse[PendingChangeResponse])
def list_pending_changes(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    changes = pending_changes.list_pending(db)
    return {"data": changes, "total": len(changes)}


@router.get("/my-changes", response_model=ListResponse[PendingChangeResponse])
def list_my_changes(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Changes submitted by the current user, in every status."""
    changes = pending_changes.list_by_identity(db, current_user.id)
    return {"data": changes, "total": len(changes)}


@router.get("/status/{status}", response_model=ListResponse[PendingChangeResponse])
def list_changes_by_status(
    status: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    changes = pending_changes.list_by_status(db, status)
    return {"data": changes, "total": len(changes)}


@router.get("/{change_id}", response_model=DataResponse[PendingChangeResponse])
def get_pending_change(
    change_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Admins see any change; editors only their own."""
    change = pending_changes.get_by_id(db, change_id)
    if change is None or (not is_admin(current_user) and change.user_id != current_user.id):
        raise NotFound("Pending change not found")
    return {"data": change}


@router.post("/{change_id}/review", response_model=ReviewResponse)
def review_pending_change(
    change_id: str,
    review_data: PendingChangeReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    """
    Approve or reject a pending change.

    The review is recorded first; an approved change is then applied to the
    catalog. If applying fails the change stays approved and the error is
    returned in ``apply_error``.
    """
    reviewed = review_engine.review(
        db,
        change_id,
        current_user,
        decision=review_data.status,
        notes=review_data.review_notes,
        context=context,
    )

    response = {"message": f"Change {review_data.status}", "data": reviewed}
    if reviewed.status == ChangeStatus.APPROVED.value:
        result = apply_approved_change(db, reviewed, current_user, context=context)
        response["applied"] = result.applied
        response["apply_error"] = result.error
        # Reload so the response reflects the stored record
        response["data"] = pending_changes.get_by_id(db, change_id)
    return response


@router.delete("/{change_id}", response_model=MessageResponse)
def purge_pending_change(
    change_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    context: RequestContext = Depends(get_request_context),
):
    """Administrative purge of a pending change in any status."""
    if not pending_changes.delete(db, change_id):
        raise NotFound("Pending change not found")

    record_audit(
        db,
        user_id=current_user.id,
        action=ActionType.DELETE,
        resource_type=pending_changes.PENDING_CHANGE_RESOURCE,
        resource_id=change_id,
        context=context,
    )
    return {"message": "Pending change deleted"}
