"""Audit logs routes (admin only, read only)."""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from catalog_admin.core.database import get_db
from catalog_admin.core.deps import require_admin
from catalog_admin.core.roles import ActionType
from catalog_admin.models.user import User
from catalog_admin.schemas.audit_log import AuditLogResponse
from catalog_admin.schemas.common import ListResponse
from catalog_admin.services import audit

router = APIRouter()


@router.get("/", response_model=ListResponse[AuditLogResponse])
def list_audit_logs(
    user_id: Optional[str] = Query(None, description="Filter by user who performed the action"),
    action: Optional[ActionType] = Query(None, description="Filter by action"),
    resource_type: Optional[str] = Query(None, description="Filter by resource type (e.g., product)"),
    start_date: Optional[datetime] = Query(None, description="Only entries at or after this time (UTC)"),
    end_date: Optional[datetime] = Query(None, description="Only entries at or before this time (UTC)"),
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Maximum number of results"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List audit logs with optional filters, most recent first."""
    logs = audit.list_audit_logs(
        db,
        user_id=user_id,
        action=action.value if action else None,
        resource_type=resource_type,
        start_date=start_date,
        end_date=end_date,
        limit=limit,
    )
    return {"data": logs, "total": len(logs)}


@router.get("/user/{user_id}", response_model=ListResponse[AuditLogResponse])
def list_user_audit_logs(
    user_id: str,
    limit: int = Query(audit.DEFAULT_ACTOR_LIMIT, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    logs = audit.list_by_actor(db, user_id, limit=limit)
    return {"data": logs, "total": len(logs)}


@router.get("/resource/{resource_id}", response_model=ListResponse[AuditLogResponse])
def list_resource_audit_logs(
    resource_id: str,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    logs = audit.list_by_resource(db, resource_id, limit=limit)
    return {"data": logs, "total": len(logs)}
