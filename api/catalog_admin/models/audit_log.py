"""Audit log model for tracking state-changing actions."""
from datetime import datetime
from typing import Any, Optional
from sqlalchemy import CheckConstraint, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from catalog_admin.core.time import utc_now
from catalog_admin.models.base import Base, new_id
from catalog_admin.models.user import User


class AuditLog(Base):
    """Append-only record of an action taken by an authenticated user."""
    __tablename__ = "audit_logs"
    __table_args__ = (
        CheckConstraint(
            "action IN ('create', 'update', 'delete', 'login', 'logout', 'approve', 'reject')",
            name="ck_audit_logs_action",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    resource_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    resource_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    details: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, index=True)

    user: Mapped["User"] = relationship("User")
