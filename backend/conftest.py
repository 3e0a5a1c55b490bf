"""
Pytest configuration file for backend testing.
"""
import os

# Point the application at a private in-memory database before any
# backend module builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from backend.app.main import app
from backend.core.auth import Caller, UserRole, create_access_token
from backend.core.database import Base, SessionLocal, engine, get_db
from backend.tests.factories import bind_session


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    bind_session(session)
    try:
        yield session
    finally:
        bind_session(None)
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with the database dependency overridden"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(user_id: int, role: UserRole) -> dict:
    token = create_access_token(user_id, role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin():
    return Caller(user_id=1, role=UserRole.ADMIN)


@pytest.fixture
def headers_for():
    """Bearer headers for an arbitrary user and role"""
    return auth_headers
