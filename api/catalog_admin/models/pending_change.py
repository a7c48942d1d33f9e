"""Pending change - a proposed catalog mutation awaiting admin review."""
from datetime import datetime
from typing import Any, Optional
from sqlalchemy import CheckConstraint, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from catalog_admin.core.roles import ChangeStatus
from catalog_admin.core.time import utc_now
from catalog_admin.models.base import Base, new_id
from catalog_admin.models.user import User


class PendingChange(Base):
    """
    Stores edits submitted by non-admin users for admin review.

    A change is created with status ``pending`` and no review metadata, and
    is reviewed exactly once, moving to ``approved`` or ``rejected`` with the
    reviewer and review time set. Terminal changes are never re-opened.
    """
    __tablename__ = "pending_changes"
    __table_args__ = (
        CheckConstraint("action IN ('create', 'update', 'delete')", name="ck_pending_changes_action"),
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="ck_pending_changes_status"),
        CheckConstraint(
            "(status = 'pending' AND reviewed_by IS NULL AND reviewed_at IS NULL) "
            "OR (status <> 'pending' AND reviewed_by IS NOT NULL AND reviewed_at IS NOT NULL)",
            name="ck_pending_changes_review_metadata",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(20), nullable=False)  # create, update, delete
    resource_type: Mapped[str] = mapped_column(String(100), nullable=False)
    resource_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)  # Null for creates
    change_data: Mapped[Any] = mapped_column(JSON, nullable=False)
    previous_data: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ChangeStatus.PENDING.value, index=True)
    reviewed_by: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id"), nullable=True)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    review_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    submitted_by: Mapped["User"] = relationship("User", foreign_keys=[user_id])
    reviewer: Mapped[Optional["User"]] = relationship("User", foreign_keys=[reviewed_by])

    def __repr__(self):
        return f"<PendingChange(id={self.id}, resource_type={self.resource_type}, status={self.status})>"
