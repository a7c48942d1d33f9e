"""Product model."""
from datetime import datetime
from typing import Any, List, Optional, TYPE_CHECKING
from sqlalchemy import String, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from catalog_admin.core.time import utc_now
from catalog_admin.models.base import Base, new_id

if TYPE_CHECKING:
    from catalog_admin.models.category import Subcategory


class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    subcategory_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("subcategories.id", ondelete="CASCADE"),
        nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    short_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # Display string, e.g. "12.00"
    images: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    specifications: Mapped[Optional[Any]] = mapped_column(JSON, nullable=True)
    features: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    display_order: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    subcategory: Mapped["Subcategory"] = relationship("Subcategory", back_populates="products")
