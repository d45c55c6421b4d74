"""Repository for cache records.

Session lifecycle is owned by the caller; methods only stage and flush.
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from agent_pr_stats.db.models import CacheRecord


class CacheRecordRepository:
    """Data access for the cache_entries table.

    Usage:
        async with session_factory() as session:
            repo = CacheRecordRepository(session)
            await repo.upsert("key", "value")
            await session.commit()
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a session.

        Args:
            session: Async SQLAlchemy session (caller manages lifecycle)
        """
        self._session = session

    @property
    def session(self) -> AsyncSession:
        """Access the underlying session."""
        return self._session

    async def get(self, key: str) -> CacheRecord | None:
        """Get a record by key."""
        return await self._session.get(CacheRecord, key)

    async def upsert(self, key: str, value: str) -> CacheRecord:
        """Insert or replace the value stored under `key`.

        Args:
            key: Cache key
            value: Serialized envelope

        Returns:
            The persisted record
        """
        record = await self.get(key)
        if record is None:
            record = CacheRecord(key=key, value=value)
            self._session.add(record)
        else:
            record.value = value
        await self._session.flush()
        return record

    async def delete_key(self, key: str) -> None:
        """Delete the record stored under `key` (no-op if absent)."""
        await self._session.execute(delete(CacheRecord).where(CacheRecord.key == key))

    async def list_keys(self, prefix: str | None = None) -> list[str]:
        """List stored keys, optionally restricted to a prefix."""
        stmt = select(CacheRecord.key).order_by(CacheRecord.key)
        if prefix:
            stmt = stmt.where(CacheRecord.key.startswith(prefix, autoescape=True))
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count stored records."""
        stmt = select(func.count()).select_from(CacheRecord)
        result = await self._session.execute(stmt)
        return result.scalar() or 0
