"""Pytest fixtures for API testing."""
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog_admin.main import app
from catalog_admin.core.database import get_db
from catalog_admin.core.security import get_password_hash, create_access_token
from catalog_admin.models import Base, User, Category, Subcategory, Product

# In-memory SQLite for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Test client with database override.

    Note: db_session already created tables, so we don't need to create them again.
    """
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _make_user(db_session, email, password, role):
    user = User(
        email=email,
        password_hash=get_password_hash(password),
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def _headers_for(user):
    token = create_access_token(data={"sub": user.id, "email": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(db_session):
    """Create an admin user."""
    return _make_user(db_session, "admin@example.com", "admin123", "admin")


@pytest.fixture
def editor_user(db_session):
    """Create an editor user."""
    return _make_user(db_session, "editor@example.com", "editor123", "editor")


@pytest.fixture
def second_editor(db_session):
    """Create a second editor for ownership checks."""
    return _make_user(db_session, "editor2@example.com", "editor456", "editor")


@pytest.fixture
def admin_headers(admin_user):
    """Get authorization headers for admin user."""
    return _headers_for(admin_user)


@pytest.fixture
def editor_headers(editor_user):
    """Get authorization headers for editor user."""
    return _headers_for(editor_user)


@pytest.fixture
def second_editor_headers(second_editor):
    return _headers_for(second_editor)


@pytest.fixture
def sample_category(db_session):
    category = Category(name="Solar Panels", slug="solar-panels", display_order="1")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def sample_subcategory(db_session, sample_category):
    subcategory = Subcategory(
        category_id=sample_category.id,
        name="Monocrystalline",
        slug="monocrystalline",
        display_order="1"
    )
    db_session.add(subcategory)
    db_session.commit()
    db_session.refresh(subcategory)
    return subcategory


@pytest.fixture
def sample_product(db_session, sample_subcategory):
    """Create an active product priced at 10.00."""
    product = Product(
        subcategory_id=sample_subcategory.id,
        name="Panel 400W",
        slug="panel-400w",
        price="10.00",
        features=["400W", "25 year warranty"],
        display_order="1"
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture(scope="session")
def postgres_engine():
    """Engine for the Postgres-backed tests; skipped unless TEST_POSTGRES_URL is set."""
    url = os.environ.get("TEST_POSTGRES_URL")
    if not url:
        pytest.skip("TEST_POSTGRES_URL not set")
    pg_engine = create_engine(url)
    yield pg_engine
    pg_engine.dispose()


@pytest.fixture
def postgres_db_session(postgres_engine):
    Base.metadata.create_all(bind=postgres_engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=postgres_engine)
    db = SessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=postgres_engine)
