"""
RideRelay Backend: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own application built by `create_app()` over a
       fresh file-backed SQLite database (aiosqlite), so tests exercise the
       real SQLAlchemy queries without a PostgreSQL server.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:    Settings pointing at tmp_path/riderelay_test.db
    ├── app:              FastAPI app with tables created
    ├── db_session:       AsyncSession on the app's Database
    ├── auth_service:     The app's AuthService
    ├── mock_db_session:  AsyncMock session for fault injection
    ├── test_client:      HTTPX AsyncClient over ASGITransport (no cookie)
    └── authed_client:    test_client after POST /auth/access-token
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./riderelay_import.db"
os.environ["JWT_SECRET"] = "test-secret-not-real-0123456789"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.config import Settings  # noqa: E402
from app.main import create_app  # noqa: E402

API = "/api/v1"
RIDER_EMAIL = "rider@example.com"


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'riderelay_test.db'}",
        jwt_secret="test-secret-not-real-0123456789",
        log_level="WARNING",
        api_prefix=API,
        db_connect_attempts=1,
        db_connect_min_wait=0,
        db_connect_max_wait=0,
    )


@pytest_asyncio.fixture
async def app(test_settings):
    application = create_app(test_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def db_session(app):
    async with app.state.database.session_factory() as session:
        yield session


@pytest.fixture
def auth_service(app):
    return app.state.auth_service


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession for simulating store faults.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def test_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def authed_client(test_client):
    """test_client holding a valid `token` cookie for RIDER_EMAIL."""
    response = await test_client.post(
        f"{API}/auth/access-token", json={"email": RIDER_EMAIL, "name": "Rider"}
    )
    assert response.status_code == 200
    return test_client
