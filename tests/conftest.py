"""Pytest configuration and fixtures for testing."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app.ai.provider import CompletionParams, Message
from backend.app.db.base import Base
from backend.app.db import models  # noqa: F401  (registers tables on Base.metadata)

TEST_PASSWORD = "correct-horse-battery"


class FakeCompletionProvider:
    """Deterministic completion provider.

    Replies are consumed in order; an exception in the queue is raised instead
    of returned. Every call is recorded for assertions on prompts and params.
    """

    model_name = "fake-model"

    def __init__(self):
        self.replies: list[str | Exception] = []
        self.calls: list[tuple[list[Message], CompletionParams]] = []

    def queue(self, *replies: str | Exception) -> "FakeCompletionProvider":
        self.replies.extend(replies)
        return self

    def complete(self, messages: list[Message], params: CompletionParams) -> str:
        self.calls.append((messages, params))
        if not self.replies:
            raise AssertionError("FakeCompletionProvider called with no queued reply")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def last_user_prompt(self) -> str:
        messages, _ = self.calls[-1]
        return next(m.content for m in messages if m.role == "user")


@pytest.fixture(scope="function")
def test_db_engine():
    """Create a test database engine with in-memory SQLite."""
    # StaticPool keeps the single in-memory database alive across the
    # TestClient worker thread and the test thread
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(engine)

    yield engine

    # Cleanup
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session(test_db_engine):
    """Create a test database session configured like the application's."""
    SessionFactory = sessionmaker(
        bind=test_db_engine, autoflush=False, expire_on_commit=False
    )
    session = SessionFactory()

    yield session

    session.close()


def _make_user(session: Session, email: str):
    from backend.app.db.models.user import User
    from backend.app.security.passwords import hash_password

    user = User(
        email=email,
        password_hash=hash_password(TEST_PASSWORD),
        first_name="Test",
        last_name="Traveler",
    )
    session.add(user)
    session.commit()
    return user


@pytest.fixture(scope="function")
def test_user(test_session: Session):
    """Create a test user."""
    return _make_user(test_session, "test@example.com")


@pytest.fixture(scope="function")
def other_user(test_session: Session):
    """Create a second user who must never see test_user's data."""
    return _make_user(test_session, "other@example.com")


@pytest.fixture(scope="function")
def test_trip(test_session: Session, test_user):
    """Create a four-day Tokyo trip owned by test_user."""
    from backend.app.db.models.trip import Trip

    trip = Trip(
        user_id=test_user.user_id,
        destination="Tokyo",
        country="Japan",
        city="Tokyo",
        start_date=date(2025, 6, 1),
        end_date=date(2025, 6, 5),
        budget=2000.0,
        currency="USD",
        number_of_travelers=2,
    )
    test_session.add(trip)
    test_session.commit()
    return trip


@pytest.fixture(scope="function")
def fake_provider():
    """Completion provider with no queued replies."""
    return FakeCompletionProvider()


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """Bearer headers for test_user."""
    from backend.app.security.jwt import create_access_token

    token = create_access_token(test_user.user_id, test_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def other_auth_headers(other_user):
    """Bearer headers for other_user."""
    from backend.app.security.jwt import create_access_token

    token = create_access_token(other_user.user_id, other_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(test_session, fake_provider):
    """Create a test client with session and provider overrides."""
    from backend.app.api.deps import get_completion_provider
    from backend.app.db.session import get_session
    from backend.app.main import app

    def override_get_session():
        try:
            yield test_session
        finally:
            pass  # Don't close the session, it's managed by the test

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_completion_provider] = lambda: fake_provider
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def test_password():
    """Plaintext password for test_user and other_user."""
    return TEST_PASSWORD
