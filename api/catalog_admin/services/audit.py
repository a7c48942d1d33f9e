"""Audit recorder.

Handlers call ``record_audit`` explicitly once the primary operation has
committed. Recording is best-effort: a failure to persist the entry is
logged and swallowed so the caller still gets its result.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from catalog_admin.core.roles import ActionType
from catalog_admin.models.audit_log import AuditLog

logger = logging.getLogger(__name__)

DEFAULT_ACTOR_LIMIT = 50


@dataclass(frozen=True)
class RequestContext:
    """Network details of the request that triggered an audited action."""
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @classmethod
    def from_request(cls, request: Request) -> "RequestContext":
        forwarded = request.headers.get("x-forwarded-for", "")
        ip_address = forwarded.split(",")[0].strip() if forwarded else None
        if not ip_address and request.client:
            ip_address = request.client.host
        return cls(
            ip_address=ip_address[:45] if ip_address else None,
            user_agent=request.headers.get("user-agent") or None,
        )


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency resolving the audit context of the current request."""
    return RequestContext.from_request(request)


def _write_entry(db: Session, entry: AuditLog) -> None:
    db.add(entry)
    db.commit()


def record_audit(
    db: Session,
    user_id: str,
    action: ActionType | str,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    details: Optional[Any] = None,
    context: Optional[RequestContext] = None,
) -> Optional[AuditLog]:
    """
    Append an audit log entry for a completed action.

    Must only be called after the primary operation has been committed:
    a failed write is rolled back, which would otherwise discard uncommitted
    primary work in the same session.

    Returns:
        The stored entry, or None if it could not be persisted.
    """
    context = context or RequestContext()
    entry = AuditLog(
        user_id=user_id,
        action=ActionType(action).value,
        resource_type=resource_type,
        resource_id=resource_id,
        details=details,
        ip_address=context.ip_address,
        user_agent=context.user_agent,
    )
    try:
        _write_entry(db, entry)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            f"Failed to create audit log: action={entry.action} "
            f"resource_type={resource_type} resource_id={resource_id} user_id={user_id}"
        )
        return None
    return entry


def list_audit_logs(
    db: Session,
    user_id: Optional[str] = None,
    action: Optional[str] = None,
    resource_type: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    limit: Optional[int] = None,
) -> List[AuditLog]:
    """List audit logs matching all given filters, most recent first."""
    query = db.query(AuditLog).options(joinedload(AuditLog.user))

    if user_id:
        query = query.filter(AuditLog.user_id == user_id)
    if action:
        query = query.filter(AuditLog.action == action)
    if resource_type:
        query = query.filter(AuditLog.resource_type == resource_type)
    if start_date:
        query = query.filter(AuditLog.created_at >= start_date)
    if end_date:
        query = query.filter(AuditLog.created_at <= end_date)

    query = query.order_by(AuditLog.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def list_by_actor(db: Session, user_id: str, limit: Optional[int] = DEFAULT_ACTOR_LIMIT) -> List[AuditLog]:
    return list_audit_logs(db, user_id=user_id, limit=limit)


def list_by_resource(db: Session, resource_id: str, limit: Optional[int] = None) -> List[AuditLog]:
    query = db.query(AuditLog).options(joinedload(AuditLog.user)).filter(
        AuditLog.resource_id == resource_id
    ).order_by(AuditLog.created_at.desc())
    if limit:
        query = query.limit(limit)
    return query.all()


def list_in_range(
    db: Session,
    start: Optional[datetime],
    end: Optional[datetime],
    limit: Optional[int] = None,
) -> List[AuditLog]:
    return list_audit_logs(db, start_date=start, end_date=end, limit=limit)
