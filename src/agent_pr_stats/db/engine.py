"""Async SQLAlchemy engine management for the cache database."""

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from agent_pr_stats.config import get_settings
from agent_pr_stats.db.models import Base

# Module-level engine instance (initialized lazily)
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Get or create the async SQLAlchemy engine for the cache database."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(
            settings.cache.database_url,
            echo=False,
            future=True,
            poolclass=pool.NullPool,  # Required for SQLite to prevent "database is locked"
        )
    return _engine


def make_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to `engine`."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create all cache tables (no-op for tables that already exist)."""
    target = engine or get_engine()
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Dispose the engine and close all connections.

    Call this when shutting down the application.
    """
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None
