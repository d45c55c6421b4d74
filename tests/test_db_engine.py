"""Tests for database engine and session management."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

import agent_pr_stats.db.engine as engine_module
from agent_pr_stats.config import get_settings
from agent_pr_stats.db import (
    CacheRecord,
    create_tables,
    dispose_engine,
    get_engine,
    make_session_factory,
)


class TestDatabaseEngine:
    """Tests for async SQLAlchemy engine operations."""

    async def test_create_tables(self, test_engine):
        """Test that the cache table is created."""
        async with test_engine.connect() as conn:
            # Query SQLite to list tables
            result = await conn.execute(
                text("SELECT name FROM sqlite_master WHERE type='table'")
            )
            tables = {row[0] for row in result.fetchall()}

        assert "cache_entries" in tables

    async def test_create_tables_is_idempotent(self):
        """Creating tables twice does not fail."""
        engine = create_async_engine("sqlite+aiosqlite:///:memory:")
        await create_tables(engine)
        await create_tables(engine)
        await engine.dispose()

    async def test_session_commits_on_success(self, test_engine):
        """Test that session commits changes on successful operations."""
        session_factory = make_session_factory(test_engine)

        async with session_factory() as session:
            session.add(CacheRecord(key="agent_pr_cache_v3_a_auth", value="{}"))
            await session.commit()

        # Verify in a new session
        async with session_factory() as session:
            result = await session.get(CacheRecord, "agent_pr_cache_v3_a_auth")
            assert result is not None
            assert result.value == "{}"

    async def test_session_rollbacks_on_error(self, test_engine):
        """Test that session rolls back on exception."""
        session_factory = make_session_factory(test_engine)

        try:
            async with session_factory() as session:
                session.add(CacheRecord(key="rollback-test", value="{}"))
                await session.flush()  # Write to DB but don't commit
                raise ValueError("Simulated error")
        except ValueError:
            pass

        async with session_factory() as session:
            result = await session.execute(
                text("SELECT COUNT(*) FROM cache_entries WHERE key = 'rollback-test'")
            )
            assert result.scalar() == 0

    async def test_get_engine_uses_settings(self, monkeypatch):
        """The shared engine points at the configured cache database."""
        monkeypatch.setenv("CACHE__DATABASE_URL", "sqlite+aiosqlite:///:memory:")
        get_settings.cache_clear()
        await dispose_engine()

        engine = get_engine()
        try:
            assert str(engine.url) == "sqlite+aiosqlite:///:memory:"
            assert get_engine() is engine
        finally:
            await dispose_engine()

        assert engine_module._engine is None

    async def test_dispose_without_engine(self):
        """Disposing when no engine exists is a no-op."""
        await dispose_engine()
        await dispose_engine()
