"""
Test configuration and fixtures for Gut Insights.

Implements the transaction rollback pattern:
- Session-scoped engine (TEST_DATABASE_URL, or in-memory SQLite)
- Function-scoped transactional session with automatic rollback
- TestClient with database and collaborator dependency overrides
- Authenticated client fixtures
"""

import os
import secrets
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gut_insights.database import Base, get_db
from gut_insights.main import app
from gut_insights.models import User, Session as UserSession
from gut_insights.services.analysis import (
    AnalysisPolicy,
    ReportAssembler,
    get_report_assembler,
)
from gut_insights.services.auth.local_provider import hash_password
from gut_insights.services.digestive_data_service import (
    DigestiveDataService,
    get_digestive_data_service,
)
from tests.fixtures.mocks import MockNarrativeGenerator, SerialDigestiveDataService


# =============================================================================
# Database Fixtures
# =============================================================================


def get_test_database_url() -> str:
    """
    Get the test database URL.

    Priority:
    1. TEST_DATABASE_URL environment variable
    2. In-memory SQLite (no server needed)

    Each test runs in a transaction that is rolled back after the test,
    so no test data persists and tests are fully isolated.
    """
    return os.environ.get("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")


@pytest.fixture(scope="session")
def test_engine():
    """
    Create test database engine once per session.

    Tables are created at the start and dropped at the end.
    """
    database_url = get_test_database_url()

    if database_url.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(database_url)

    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(test_engine) -> Generator[Session, None, None]:
    """
    Provide a transactional database session that rolls back after each test.

    This pattern ensures:
    - Complete test isolation (tests can't affect each other)
    - No cleanup queries needed
    - Fast execution (just rollback, no actual deletion)
    """
    connection = test_engine.connect()
    transaction = connection.begin()

    TestingSessionLocal = sessionmaker(bind=connection)
    session = TestingSessionLocal()

    # Handle nested transactions (for savepoints within tests)
    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(session, transaction):
        if transaction.nested and not transaction._parent.nested:
            session.begin_nested()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def borrowed_session_factory(db: Session):
    """
    Session factory handing out the test session without closing it.

    Lets services that open their own sessions run inside the rollback
    transaction.
    """

    @contextmanager
    def borrow():
        yield db

    return borrow


@pytest.fixture
def data_service(borrowed_session_factory) -> DigestiveDataService:
    """Data service reading from the transactional test session."""
    return DigestiveDataService(borrowed_session_factory)


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def mock_narrative() -> MockNarrativeGenerator:
    """Narrative generator returning a canned text; configure per test."""
    return MockNarrativeGenerator()


@pytest.fixture
def assembler(mock_narrative: MockNarrativeGenerator) -> ReportAssembler:
    """Report assembler with default policy and the mock narrative generator."""
    return ReportAssembler(AnalysisPolicy(narrative_timeout_seconds=1.0), mock_narrative)


# =============================================================================
# TestClient Fixtures
# =============================================================================


def _override_dependencies(db: Session, assembler: ReportAssembler) -> None:
    def override_get_db():
        try:
            yield db
        finally:
            pass  # Don't close - managed by db fixture

    def override_data_service():
        # One shared test session cannot serve concurrent threads
        return SerialDigestiveDataService(lambda: _borrow(db))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_digestive_data_service] = override_data_service
    app.dependency_overrides[get_report_assembler] = lambda: assembler


@contextmanager
def _borrow(db: Session):
    yield db


@pytest.fixture
def client(db: Session, assembler: ReportAssembler) -> Generator[TestClient, None, None]:
    """
    TestClient with database and analysis collaborators overridden.

    The database session is injected into the app's get_db dependency.
    """
    _override_dependencies(db, assembler)

    with TestClient(app) as test_client:
        # Set default Referer so CSRF Origin middleware allows requests
        test_client.headers["referer"] = "http://testserver/"
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# Authentication Fixtures
# =============================================================================


@pytest.fixture
def test_user(db: Session) -> User:
    """Create a test user."""
    user = User(
        email="testuser@example.com",
        password_hash=hash_password("testpassword123"),
        is_admin=False,
    )
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def test_session(db: Session, test_user: User) -> UserSession:
    """Create a test session for the test user."""
    session = UserSession(
        user_id=test_user.id,
        token=secrets.token_urlsafe(32),
        expires_at=datetime.now(timezone.utc) + timedelta(days=7),
        user_agent="pytest-test-client",
        ip_address="127.0.0.1",
    )
    db.add(session)
    db.flush()
    return session


@pytest.fixture
def auth_client(
    db: Session, test_session: UserSession, assembler: ReportAssembler
) -> Generator[TestClient, None, None]:
    """
    Authenticated TestClient for the test user.

    Creates a separate TestClient instance to avoid cookie conflicts.
    """
    from gut_insights.config import settings

    _override_dependencies(db, assembler)

    with TestClient(app) as test_client:
        test_client.cookies.set(settings.session_cookie_name, test_session.token)
        # Set default Referer so CSRF Origin middleware allows requests
        test_client.headers["referer"] = "http://testserver/"
        yield test_client

    app.dependency_overrides.clear()


# =============================================================================
# pytest markers
# =============================================================================


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m not slow')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line(
        "markers",
        "security: marks tests as security tests (deselect with '-m not security')",
    )
