"""Roles, action vocabulary and the role gate.

Every decision about whether an identity may act directly, must route a
change through approval, or may review changes is made here so routes do
not re-check roles ad hoc.
"""
from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from catalog_admin.core.exceptions import PolicyViolation

if TYPE_CHECKING:
    from catalog_admin.models.user import User


class RoleCode(str, enum.Enum):
    ADMIN = "admin"
    EDITOR = "editor"


class ActionType(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    LOGIN = "login"
    LOGOUT = "logout"
    APPROVE = "approve"
    REJECT = "reject"


class ChangeStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Actions a pending change may describe
CHANGE_ACTIONS = (ActionType.CREATE, ActionType.UPDATE, ActionType.DELETE)

# Terminal review decisions and the audit action each one records
REVIEW_DECISIONS = {
    ChangeStatus.APPROVED: ActionType.APPROVE,
    ChangeStatus.REJECTED: ActionType.REJECT,
}


def is_admin(user: "User") -> bool:
    return user.role == RoleCode.ADMIN.value


def requires_approval(user: "User") -> bool:
    """Non-admin changes are deferred to the pending-change workflow."""
    return not is_admin(user)


def ensure_can_submit(user: "User") -> None:
    """Admins act directly and never submit changes for approval."""
    if not requires_approval(user):
        raise PolicyViolation(
            "Admins do not require approval for changes",
            status_code=400,
        )


def ensure_admin(user: "User") -> None:
    """Direct catalog writes, reviews, purges and audit reads are admin only."""
    if not is_admin(user):
        raise PolicyViolation("Admin access required")


def ensure_can_review(user: "User") -> None:
    ensure_admin(user)


def ensure_user_is_mutable(target: "User", acting_user: "User", operation: str) -> None:
    """
    Guard role changes, deactivation and deletion of user accounts.

    Admin accounts can never be demoted, deactivated or deleted, and no one
    may deactivate or delete their own account.
    """
    if is_admin(target):
        raise PolicyViolation(f"Cannot {operation} admin")
    if operation in ("deactivate", "delete") and target.id == acting_user.id:
        raise PolicyViolation(f"Cannot {operation} your own account")


def build_capabilities(role_code: str | None) -> dict:
    return {
        "is_admin": role_code == RoleCode.ADMIN.value,
        "requires_approval": role_code != RoleCode.ADMIN.value,
        "can_manage_users": role_code == RoleCode.ADMIN.value,
        "can_review_changes": role_code == RoleCode.ADMIN.value,
        "can_submit_changes": role_code == RoleCode.EDITOR.value,
        "can_view_audit_logs": role_code == RoleCode.ADMIN.value,
    }
