"""
Test fixtures: an app per test on a private in-memory SQLite database, with a
session store driven by a controllable clock.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.deps import get_db
from core.config import Settings
from main import create_app
from models.base import Base
from services.session_service import SessionManager
from services.session_store import InMemorySessionStore

PASSWORD = "correct-horse-battery"


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        session_secret="test-secret",
        frontend_origin="http://localhost:5173",
        log_level="WARNING",
    )


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(settings, session_factory, clock):
    application = create_app(settings)
    application.state.session_manager = SessionManager(
        store=InMemorySessionStore(prune_interval_seconds=24 * 3600, clock=clock),
        secret=settings.session_secret,
        algorithm=settings.session_algorithm,
        ttl_seconds=settings.session_ttl_seconds,
    )

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    application.dependency_overrides[get_db] = _get_test_db
    return application


@pytest.fixture
def make_client(app):
    """Each client has its own cookie jar, i.e. its own browser."""

    def _make(**kwargs) -> TestClient:
        return TestClient(app, **kwargs)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def register_user(make_client):
    def _register(username: str = "alice", email: str | None = None, password: str = PASSWORD) -> TestClient:
        c = make_client()
        resp = c.post(
            "/api/register",
            json={"username": username, "email": email or f"{username}@example.com", "password": password},
        )
        assert resp.status_code == 200, resp.text
        return c

    return _register


@pytest.fixture
def alice(register_user):
    return register_user("alice")


@pytest.fixture
def bob(register_user):
    return register_user("bob")
