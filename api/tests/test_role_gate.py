"""Tests for the role gate."""
import pytest

from catalog_admin.core.exceptions import PolicyViolation
from catalog_admin.core.roles import (
    build_capabilities,
    ensure_admin,
    ensure_can_submit,
    ensure_user_is_mutable,
    requires_approval,
)


def test_requires_approval(admin_user, editor_user):
    assert requires_approval(editor_user) is True
    assert requires_approval(admin_user) is False


def test_admin_is_exempt_from_submission(admin_user, editor_user):
    ensure_can_submit(editor_user)
    with pytest.raises(PolicyViolation) as exc_info:
        ensure_can_submit(admin_user)
    assert exc_info.value.status_code == 400


def test_ensure_admin(admin_user, editor_user):
    ensure_admin(admin_user)
    with pytest.raises(PolicyViolation) as exc_info:
        ensure_admin(editor_user)
    assert exc_info.value.status_code == 403
    assert exc_info.value.detail == "Admin access required"


def test_admins_are_immutable(admin_user):
    with pytest.raises(PolicyViolation) as exc_info:
        ensure_user_is_mutable(admin_user, admin_user, "deactivate")
    assert exc_info.value.detail == "Cannot deactivate admin"


def test_editor_is_mutable(admin_user, editor_user):
    ensure_user_is_mutable(editor_user, admin_user, "deactivate")


def test_capabilities_follow_role():
    assert build_capabilities("admin")["can_review_changes"] is True
    assert build_capabilities("editor")["can_review_changes"] is False
    assert build_capabilities(None)["is_admin"] is False


def test_self_check_only_applies_to_deactivate_and_delete(editor_user):
    ensure_user_is_mutable(editor_user, editor_user, "activate")
    with pytest.raises(PolicyViolation) as exc_info:
        ensure_user_is_mutable(editor_user, editor_user, "deactivate")
    assert exc_info.value.detail == "Cannot deactivate your own account"
