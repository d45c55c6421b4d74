"""Key/value storage backends for the cache store.

Backends only move strings; envelope validation and expiry live in
CacheStore.
"""

from __future__ import annotations

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from agent_pr_stats.db import CacheRecordRepository, create_tables, get_engine, make_session_factory
from agent_pr_stats.logging import get_logger

logger = get_logger(__name__)


class StorageError(Exception):
    """Base exception for cache storage failures."""

    pass


class StorageQuotaExceededError(StorageError):
    """Raised when a write would exceed the backend's byte quota."""

    def __init__(self, needed: int, quota: int) -> None:
        super().__init__(f"Storage quota exceeded: {needed} bytes needed, quota is {quota}")
        self.needed = needed
        self.quota = quota


class KeyValueStore(Protocol):
    """Async string key/value storage."""

    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...

    async def remove_item(self, key: str) -> None: ...

    async def keys(self) -> list[str]: ...


def _entry_size(key: str, value: str) -> int:
    return len(key.encode("utf-8")) + len(value.encode("utf-8"))


class MemoryKeyValueStore:
    """Dict-backed store with an optional byte quota.

    Usage:
        store = MemoryKeyValueStore(quota_bytes=5_000_000)
        await store.set_item("key", "value")
    """

    def __init__(self, quota_bytes: int | None = None) -> None:
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    @property
    def size_bytes(self) -> int:
        """Bytes currently used by keys and values."""
        return sum(_entry_size(key, value) for key, value in self._items.items())

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            current = self._items.get(key)
            used = self.size_bytes - (_entry_size(key, current) if current is not None else 0)
            needed = used + _entry_size(key, value)
            if needed > self._quota_bytes:
                raise StorageQuotaExceededError(needed, self._quota_bytes)
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    async def keys(self) -> list[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class DatabaseKeyValueStore:
    """SQLAlchemy-backed store persisting one row per key.

    Tables are created on first use. SQLAlchemy errors are re-raised as
    StorageError so callers handle one exception type per backend.

    Usage:
        store = DatabaseKeyValueStore()  # engine from settings
        store = DatabaseKeyValueStore(create_async_engine("sqlite+aiosqlite:///:memory:"))
    """

    def __init__(self, engine: AsyncEngine | None = None) -> None:
        """Initialize the store.

        Args:
            engine: Async engine to use (defaults to the configured cache database)
        """
        self._engine = engine or get_engine()
        self._session_factory = make_session_factory(self._engine)
        self._tables_ready = False

    async def _ensure_tables(self) -> None:
        if not self._tables_ready:
            await create_tables(self._engine)
            self._tables_ready = True

    async def get_item(self, key: str) -> str | None:
        try:
            await self._ensure_tables()
            async with self._session_factory() as session:
                record = await CacheRecordRepository(session).get(key)
                return record.value if record is not None else None
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read cache key: {e}") from e

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self._ensure_tables()
            async with self._session_factory() as session:
                await CacheRecordRepository(session).upsert(key, value)
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write cache key: {e}") from e

    async def remove_item(self, key: str) -> None:
        try:
            await self._ensure_tables()
            async with self._session_factory() as session:
                await CacheRecordRepository(session).delete_key(key)
                await session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to remove cache key: {e}") from e

    async def keys(self) -> list[str]:
        try:
            await self._ensure_tables()
            async with self._session_factory() as session:
                return await CacheRecordRepository(session).list_keys()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list cache keys: {e}") from e
