"""User model."""
from datetime import datetime
from sqlalchemy import Boolean, CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from catalog_admin.core.roles import RoleCode
from catalog_admin.core.time import utc_now
from catalog_admin.models.base import Base, new_id


class User(Base):
    """An authenticated identity: an admin or an editor."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'editor')", name="ck_users_role"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=RoleCode.EDITOR.value)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
