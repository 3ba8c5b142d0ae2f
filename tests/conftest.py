"""
Shared fixtures for the Daily Diet test suite.

Each test gets its own temporary SQLite database, wired into the app through
the ``get_db`` dependency override.
"""

import os
import tempfile
from http.cookies import SimpleCookie

os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("APP_DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from daily_diet.core.database import Base, build_engine, get_db
from daily_diet.main import app
import daily_diet.models.base  # noqa: F401

SESSION_COOKIE = "session_id"


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def test_engine():
    """Temporary on-disk database with the full schema"""
    db_fd, db_path = tempfile.mkstemp(suffix=".db")
    engine = build_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(bind=engine)

    yield engine

    engine.dispose()
    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture(scope="function")
def db_session(test_engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# ============================================================================
# Application Client Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def client(test_engine):
    """FastAPI test client; every request opens a fresh DB session"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def _override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# Helpers
# ============================================================================

def session_from(response) -> str | None:
    """Extract the session token from a Set-Cookie header, if any"""
    header = response.headers.get("set-cookie")
    if not header:
        return None
    cookie = SimpleCookie()
    cookie.load(header)
    morsel = cookie.get(SESSION_COOKIE)
    return morsel.value if morsel else None


def as_session(session_id: str) -> dict[str, str]:
    return {"Cookie": f"{SESSION_COOKIE}={session_id}"}


@pytest.fixture
def new_meal(client):
    """Create a meal and return the session id that owns it"""

    def _create(session_id: str | None = None, **overrides) -> str | None:
        payload = {
            "title": "hamburguer",
            "description": "ate a hamburguer with friends",
            "in_diet": False,
        }
        payload.update(overrides)
        headers = as_session(session_id) if session_id else {}
        response = client.post("/meals/new", json=payload, headers=headers)
        assert response.status_code == 204, response.text
        return session_id or session_from(response)

    return _create
