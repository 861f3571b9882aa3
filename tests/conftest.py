"""Shared fixtures: in-memory SQLite per test, store, API client."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from artisan_connect.models import artisan_models, audit_models, event_models  # noqa: F401
from artisan_connect.core.identity import Identity, UserRole
from artisan_connect.core.store import EventStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def store(session):
    return EventStore(session)


@pytest.fixture
def buyer():
    return Identity(user_id="buyer-1", role=UserRole.BUYER)


@pytest.fixture
def admin():
    return Identity(user_id="admin-1", role=UserRole.ADMIN)


@pytest.fixture
def client(session):
    from artisan_connect.main import app
    from artisan_connect.database import get_session

    def _get_session():
        yield session

    app.dependency_overrides[get_session] = _get_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
