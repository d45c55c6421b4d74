"""Pytest configuration and shared fixtures.

Usage Guide:
- For canonical records: import make_pr / make_merged_pr from tests.factories
- For wire payloads (REST search, GraphQL): import the dict factories from tests.factories
- For cache tests: use the `clock`, `memory_backend` and `cache_store` fixtures
"""

from datetime import UTC, date, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from agent_pr_stats.cache import CacheStore, MemoryKeyValueStore
from agent_pr_stats.config import Settings, get_settings
from agent_pr_stats.db.models import Base

# -----------------------------------------------------------------------------
# Test Timeline Constants
#
# Define a consistent "test epoch" for deterministic date matching across tests.
# All hardcoded dates should reference these constants for consistency.
# -----------------------------------------------------------------------------

# Request range (dates)
JAN_01 = date(2026, 1, 1)
JAN_10 = date(2026, 1, 10)
JAN_31 = date(2026, 1, 31)

# Base datetimes (UTC)
JAN_05 = datetime(2026, 1, 5, 9, 0, 0, tzinfo=UTC)  # Typical PR opened
JAN_05_LATE = datetime(2026, 1, 5, 23, 30, 0, tzinfo=UTC)  # Same UTC day, late
JAN_06 = datetime(2026, 1, 6, 9, 0, 0, tzinfo=UTC)  # One day after JAN_05
JAN_08 = datetime(2026, 1, 8, 14, 0, 0, tzinfo=UTC)  # Later PR opened

# ISO 8601 strings (for GitHub API mocks)
JAN_05_ISO = "2026-01-05T09:00:00Z"
JAN_05_NOON_ISO = "2026-01-05T12:00:00Z"
JAN_06_ISO = "2026-01-06T09:00:00Z"
JAN_08_ISO = "2026-01-08T14:00:00Z"

# Epoch seconds used as "now" by cache and rate limit tests
NOW = 1_767_600_000.0  # 2026-01-05T08:00:00Z
RESET_ISO = "2026-01-05T09:00:00Z"
RESET_EPOCH = 1_767_603_600


class FakeClock:
    """Injectable clock returning a settable epoch time."""

    def __init__(self, now: float = NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# -----------------------------------------------------------------------------
# Settings Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring any local .env file."""
    return Settings(_env_file=None, github_token="")


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Ensure get_settings() never leaks between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# -----------------------------------------------------------------------------
# Cache Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def clock() -> FakeClock:
    """A clock frozen at NOW."""
    return FakeClock()


@pytest.fixture
def memory_backend() -> MemoryKeyValueStore:
    """Empty in-memory key/value store."""
    return MemoryKeyValueStore()


@pytest.fixture
def cache_store(memory_backend: MemoryKeyValueStore, clock: FakeClock) -> CacheStore:
    """Cache store over the memory backend with the fake clock."""
    return CacheStore(memory_backend, clock=clock)


# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
async def test_engine():
    """Create an in-memory SQLite engine for tests.

    Each test gets a fresh database with all tables created.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(test_engine):
    """Create an async session with auto-rollback.

    Changes are rolled back after each test to ensure isolation.
    """
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()
