"""Models package."""
from catalog_admin.models.base import Base
from catalog_admin.models.user import User
from catalog_admin.models.category import Category, Subcategory
from catalog_admin.models.product import Product
from catalog_admin.models.pending_change import PendingChange
from catalog_admin.models.audit_log import AuditLog

__all__ = [
    "Base",
    "User",
    "Category",
    "Subcategory",
    "Product",
    "PendingChange",
    "AuditLog",
]
