"""
Pytest configuration and fixtures.
"""

import os

# Settings are read at import time: run against SQLite with a fixed signing key;
# tests create their own tables per engine
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("DB_TYPE", "sqlite")
os.environ.setdefault("SQLITE_DB", "test.db")
os.environ.setdefault("CREATE_TABLES", "false")
os.environ.setdefault("SECRET_KEY", "test-signing-key-0123456789abcdef0123456789abcdef")

from typing import Any, Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from profile_service import app
from profile_service.core.database import Base, get_db
from profile_service.core.storage import LocalObjectStorage, get_storage
from profile_service.models.user import User
from profile_service.schemas.user import UserCreate
from profile_service.services import user as user_service

TEST_USER_DATA = {
    "email": "test@example.com",
    "password": "testpass123",
    "name": "Test User",
}


@pytest.fixture(scope="function")
def db_engine():
    """
    Create an in-memory SQLite engine with all tables for a single test.

    StaticPool keeps one shared connection, so the TestClient worker threads
    see the same database as the test body.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},  # Required for SQLite
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator:
    """Create a database session bound to the test engine."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=db_engine,
        expire_on_commit=False,
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def storage(tmp_path) -> LocalObjectStorage:
    """Object storage writing into the test's temporary directory."""
    return LocalObjectStorage(str(tmp_path / "media"), "/media")


@pytest.fixture(scope="function")
def client(db_session, storage) -> Generator:
    """
    Create test client with database session and storage overrides.
    """
    def override_get_db():
        try:
            yield db_session
        except Exception:
            db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        # Clean up dependency overrides
        app.dependency_overrides.clear()


@pytest.fixture
def register_and_login(client) -> Callable[..., str]:
    """Return a helper registering a user through the API and logging it in."""
    def _register_and_login(**overrides: Any) -> str:
        data = {**TEST_USER_DATA, **overrides}
        response = client.post("/register", json=data)
        assert response.status_code == 201, response.text
        response = client.post("/login", json={"email": data["email"], "password": data["password"]})
        assert response.status_code == 200, response.text
        return response.json()["token"]
    return _register_and_login


@pytest.fixture
def user_token(register_and_login) -> str:
    """Token for a regular registered user."""
    return register_and_login()


@pytest.fixture
def admin_user(db_session) -> User:
    """An admin user created directly through the service."""
    return user_service.create_user(
        db_session,
        UserCreate(email="admin@example.com", password="adminpass", name="Admin", isAdmin=True),
        allow_admin=True,
    )


@pytest.fixture
def admin_token(client, admin_user) -> str:
    """Token for the admin user."""
    response = client.post("/login", json={"email": "admin@example.com", "password": "adminpass"})
    assert response.status_code == 200, response.text
    return response.json()["token"]
