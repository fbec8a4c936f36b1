"""
Pytest configuration and shared fixtures.

Every test gets its own in-memory SQLite database; the app's ``get_db``
dependency is overridden to use it.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from datetime import datetime
from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobtracker.db.base import Base
from jobtracker.db.session import get_db
from jobtracker.main import app
from jobtracker.models import Job, User

PASSWORD = "secret123"


@pytest.fixture
def engine():
    """Fresh in-memory database shared by every connection in the test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """TestClient wired to the per-test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register(client: TestClient, name: str = "Alice", email: str = "alice@example.com", password: str = PASSWORD):
    return client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": password},
    )


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client) -> Dict[str, str]:
    """Authorization header for a freshly registered user."""
    resp = register(client)
    assert resp.status_code == 201
    return bearer(resp.json()["token"])


@pytest.fixture
def other_headers(client) -> Dict[str, str]:
    """Authorization header for a second, unrelated user."""
    resp = register(client, name="Mallory", email="mallory@example.com")
    assert resp.status_code == 201
    return bearer(resp.json()["token"])


@pytest.fixture
def owner(db_session) -> User:
    """A user inserted directly, for service-level tests that never log in."""
    user = User(name="Owner", email="owner@example.com", hashed_password="not-a-real-hash")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def stranger(db_session) -> User:
    user = User(name="Stranger", email="stranger@example.com", hashed_password="not-a-real-hash")
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def make_job(db_session):
    """Insert a job with explicit fields, including its creation time."""

    def _make_job(owner_id: int, position: str = "Engineer", company: str = "Acme", **fields) -> Job:
        created_at = fields.pop("created_at", None) or datetime(2024, 1, 15, 12, 0)
        job = Job(
            company=company,
            position=position,
            created_by=owner_id,
            created_at=created_at,
            updated_at=created_at,
            **fields,
        )
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job

    return _make_job
