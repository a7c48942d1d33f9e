"""Tests for default account seeding and settings helpers."""
import pytest
from sqlalchemy.engine import make_url

from catalog_admin.core.config import Settings
from catalog_admin.core.security import verify_password
from catalog_admin.models.user import User
from catalog_admin.seed import seed_database


def test_seed_is_idempotent(db_session):
    created = seed_database(db_session)
    assert sorted(u.role for u in created) == ["admin", "editor"]

    assert seed_database(db_session) == []
    assert db_session.query(User).count() == 2

    admin = db_session.query(User).filter(User.role == "admin").one()
    assert verify_password("admin123", admin.password_hash)


def test_cors_origins_parsing():
    settings = Settings(CORS_ORIGINS="http://a.test, http://b.test,")
    assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]


def test_production_requires_secret_key():
    settings = Settings(ENVIRONMENT="production", SECRET_KEY="dev-secret-key-change-in-production")
    with pytest.raises(SystemExit):
        settings.validate_production_settings()


def test_default_database_url_uses_declared_driver():
    url = make_url(Settings.model_fields["DATABASE_URL"].default)
    assert url.get_backend_name() == "postgresql"
    assert url.get_driver_name() == "psycopg2"
