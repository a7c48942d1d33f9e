"""Tests for the audit recorder service."""
import logging
from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from catalog_admin.core.time import utc_now
from catalog_admin.models.audit_log import AuditLog
from catalog_admin.models.pending_change import PendingChange
from catalog_admin.services import audit, pending_changes, review
from catalog_admin.services.audit import RequestContext, record_audit


def _fail_write(db, entry):
    raise OperationalError("INSERT INTO audit_logs", {}, Exception("disk I/O error"))


def _entry(db_session, user, action="update", resource_id="r1", created_at=None):
    entry = AuditLog(
        user_id=user.id,
        action=action,
        resource_type="product",
        resource_id=resource_id,
        created_at=created_at or utc_now(),
    )
    db_session.add(entry)
    db_session.commit()
    return entry


class TestRecordAudit:

    def test_records_entry_with_context(self, db_session, admin_user):
        context = RequestContext(ip_address="203.0.113.9", user_agent="pytest")
        entry = record_audit(
            db_session,
            user_id=admin_user.id,
            action="update",
            resource_type="product",
            resource_id="p1",
            details={"price": "12.00"},
            context=context,
        )

        assert entry is not None
        stored = db_session.query(AuditLog).one()
        assert stored.action == "update"
        assert stored.details == {"price": "12.00"}
        assert stored.ip_address == "203.0.113.9"
        assert stored.user_agent == "pytest"
        assert stored.created_at is not None

    def test_context_is_optional(self, db_session, admin_user):
        entry = record_audit(db_session, user_id=admin_user.id, action="login", resource_type="user")
        assert entry.ip_address is None
        assert entry.user_agent is None

    def test_write_failure_is_swallowed_and_logged(self, db_session, admin_user, monkeypatch, caplog):
        monkeypatch.setattr(audit, "_write_entry", _fail_write)

        with caplog.at_level(logging.ERROR, logger="catalog_admin.services.audit"):
            entry = record_audit(db_session, user_id=admin_user.id, action="update", resource_id="p1")

        assert entry is None
        assert "Failed to create audit log" in caplog.text
        assert db_session.query(AuditLog).count() == 0


class TestAuditFailureDoesNotBlockWorkflow:
    """The primary operation commits even when its audit entry cannot be written."""

    def test_submit_survives_audit_failure(self, db_session, editor_user, monkeypatch, caplog):
        monkeypatch.setattr(audit, "_write_entry", _fail_write)

        with caplog.at_level(logging.ERROR):
            change = pending_changes.submit(
                db_session, editor_user, action="update", resource_type="product",
                resource_id="p1", change_data={"price": "12.00"}
            )

        assert change.status == "pending"
        assert db_session.query(PendingChange).count() == 1
        assert db_session.query(AuditLog).count() == 0
        assert "Failed to create audit log" in caplog.text

    def test_review_survives_audit_failure(self, db_session, editor_user, admin_user, monkeypatch, caplog):
        change = pending_changes.submit(
            db_session, editor_user, action="update", resource_type="product",
            resource_id="p1", change_data={"price": "12.00"}
        )
        monkeypatch.setattr(audit, "_write_entry", _fail_write)

        with caplog.at_level(logging.ERROR):
            reviewed = review.review(db_session, change.id, admin_user, "approved")

        assert reviewed.status == "approved"
        db_session.expire_all()
        assert pending_changes.get_by_id(db_session, change.id).status == "approved"
        assert db_session.query(AuditLog).filter(AuditLog.action == "approve").count() == 0
        assert "Failed to create audit log" in caplog.text


class TestAuditQueries:

    def test_list_in_range_is_inclusive(self, db_session, admin_user):
        now = utc_now()
        _entry(db_session, admin_user, resource_id="old", created_at=now - timedelta(days=3))
        start = _entry(db_session, admin_user, resource_id="start", created_at=now - timedelta(days=2))
        middle = _entry(db_session, admin_user, resource_id="middle", created_at=now - timedelta(days=1))
        _entry(db_session, admin_user, resource_id="new", created_at=now)

        logs = audit.list_in_range(db_session, start.created_at, now - timedelta(hours=12))

        assert [log.resource_id for log in logs] == [middle.resource_id, start.resource_id]

    def test_open_ended_range(self, db_session, admin_user):
        now = utc_now()
        _entry(db_session, admin_user, resource_id="old", created_at=now - timedelta(days=3))
        _entry(db_session, admin_user, resource_id="new", created_at=now)

        logs = audit.list_in_range(db_session, now - timedelta(days=1), None)
        assert [log.resource_id for log in logs] == ["new"]

    def test_list_by_actor_newest_first_with_default_limit(self, db_session, admin_user, editor_user):
        now = utc_now()
        for i in range(audit.DEFAULT_ACTOR_LIMIT + 5):
            _entry(db_session, admin_user, resource_id=f"r{i}", created_at=now - timedelta(minutes=i))
        _entry(db_session, editor_user, resource_id="editor")

        logs = audit.list_by_actor(db_session, admin_user.id)

        assert len(logs) == audit.DEFAULT_ACTOR_LIMIT
        assert logs[0].resource_id == "r0"
        assert all(log.user_id == admin_user.id for log in logs)

    def test_list_by_resource(self, db_session, admin_user, editor_user):
        now = utc_now()
        _entry(db_session, editor_user, action="create", resource_id="c1", created_at=now - timedelta(minutes=5))
        _entry(db_session, admin_user, action="approve", resource_id="c1", created_at=now)
        _entry(db_session, admin_user, resource_id="other")

        logs = audit.list_by_resource(db_session, "c1")
        assert [log.action for log in logs] == ["approve", "create"]

    def test_audit_entries_reference_existing_users(self, db_session, admin_user):
        record_audit(db_session, user_id=admin_user.id, action="logout", resource_type="user")
        entry = db_session.query(AuditLog).one()
        assert entry.user.email == admin_user.email


@pytest.mark.parametrize("headers,expected_ip", [
    ({"x-forwarded-for": "198.51.100.7, 10.0.0.1"}, "198.51.100.7"),
    ({}, "testclient"),
])
def test_request_context_ip_resolution(client, db_session, admin_user, headers, expected_ip):
    response = client.post(
        "/auth/login",
        json={"email": "admin@example.com", "password": "admin123"},
        headers={**headers, "user-agent": "ctx-test"},
    )
    assert response.status_code == 200

    db_session.expire_all()
    entry = db_session.query(AuditLog).filter(AuditLog.action == "login").one()
    assert entry.ip_address == expected_ip
    assert entry.user_agent == "ctx-test"
