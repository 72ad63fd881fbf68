"""Pytest configuration and fixtures for adminpass.

HTTP and repository tests run against in-memory SQLite (aiosqlite, StaticPool)
with the savepoint recipe enabled, so no external database is required.
"""

import os

os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["CRON_SECRET_TOKEN"] = "test-cron-token"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from adminpass.core.config import get_settings
from adminpass.core.limiter import limiter
from adminpass.domain.enums import UserRole
from adminpass.infrastructure.persistence import models  # noqa: F401  (registers tables)
from adminpass.infrastructure.persistence.database import (
    Base,
    create_session_factory,
    enable_sqlite_savepoints,
    get_db_transactional,
)
from adminpass.infrastructure.persistence.repositories import UserRoleRepository
from adminpass.infrastructure.security.jwt import create_access_token
from adminpass.main import app

get_settings.cache_clear()

ADMIN_USER_ID = "user_admin_1"
STAFF_USER_ID = "user_staff_1"


@pytest.fixture(autouse=True)
def _test_settings():
    """Fresh settings per test; rate limiting off."""
    get_settings.cache_clear()
    limiter.enabled = False
    yield
    get_settings.cache_clear()


@pytest.fixture
async def engine() -> AsyncEngine:
    """In-memory SQLite engine with all tables created."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_savepoints(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncSession:
    """Session for repository tests. Rolls back after test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncClient:
    """Async HTTP client against the FastAPI app, bound to the test database."""

    async def _get_db_transactional():
        async with session_factory() as session:
            async with session.begin():
                yield session

    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def bearer(user_id: str) -> dict[str, str]:
    """Authorization header for user_id."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
async def admin_headers(session_factory: async_sessionmaker[AsyncSession]) -> dict[str, str]:
    """Headers for a caller whose role row says admin."""
    async with session_factory() as session:
        async with session.begin():
            await UserRoleRepository(session).set_role(ADMIN_USER_ID, UserRole.ADMIN)
    return bearer(ADMIN_USER_ID)


@pytest.fixture
def staff_headers() -> dict[str, str]:
    """Headers for a caller with no role row (treated as staff)."""
    return bearer(STAFF_USER_ID)
