"""Versioned TTL cache for acquisition results.

Reads validate the stored envelope and delete anything corrupt, expired or
written by another cache version. Writes are best-effort: a failed write is
reported as a CacheWriteResult and never interrupts the caller.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from agent_pr_stats.config import Settings
from agent_pr_stats.github.rate_limit import RateLimitInfo
from agent_pr_stats.logging import get_logger
from agent_pr_stats.schemas import AllPRCounts, FetchRequest, PullRequest

from .backends import KeyValueStore, MemoryKeyValueStore, StorageError
from .entry import CacheEntry
from .keys import DEFAULT_CACHE_VERSION, DEFAULT_KEY_PREFIX, build_cache_key, version_prefix

logger = get_logger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheWriteResult:
    """Outcome of a best-effort cache write."""

    key: str
    success: bool
    error: str | None = None


class CacheStore:
    """TTL cache over a KeyValueStore backend.

    Usage:
        cache = CacheStore(MemoryKeyValueStore())
        key = cache.key_for(request, authenticated=True)
        await cache.put(key, records, rate_limit)
        entry = await cache.get(key)
    """

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        prefix: str = DEFAULT_KEY_PREFIX,
        version: str = DEFAULT_CACHE_VERSION,
        ttl_seconds: float = 300.0,
        sweep_interval_seconds: float = 60.0,
        clock: Clock = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            backend: Storage for serialized envelopes
            prefix: Prefix shared by every cache key
            version: Cache schema version
            ttl_seconds: Entry lifetime
            sweep_interval_seconds: Minimum gap between sweeps
            clock: Returns the current epoch seconds
        """
        self._backend = backend
        self._prefix = prefix
        self._version = version
        self._ttl_seconds = ttl_seconds
        self._sweep_interval_seconds = sweep_interval_seconds
        self._clock = clock
        self._last_sweep: float | None = None

    @classmethod
    def from_settings(cls, settings: Settings, backend: KeyValueStore | None = None) -> CacheStore:
        """Build a cache from the cache settings section."""
        config = settings.cache
        return cls(
            backend if backend is not None else MemoryKeyValueStore(),
            prefix=config.key_prefix,
            version=config.version,
            ttl_seconds=config.ttl_seconds,
            sweep_interval_seconds=config.sweep_interval_seconds,
        )

    @property
    def backend(self) -> KeyValueStore:
        """The underlying storage backend."""
        return self._backend

    @property
    def version_prefix(self) -> str:
        """Prefix of keys written by this cache version."""
        return version_prefix(self._prefix, self._version)

    @property
    def last_sweep(self) -> float | None:
        """Epoch seconds of the last sweep that ran (None before the first)."""
        return self._last_sweep

    def key_for(self, request: FetchRequest, authenticated: bool) -> str:
        """Compute the cache key for a request."""
        return build_cache_key(
            request, authenticated, prefix=self._prefix, version=self._version
        )

    async def _remove(self, key: str) -> bool:
        """Delete a key, reporting whether the backend accepted the removal."""
        try:
            await self._backend.remove_item(key)
        except StorageError as e:
            logger.debug("Failed to remove cache key: {}", e)
            return False
        return True

    @staticmethod
    def _parse(raw: str) -> CacheEntry | None:
        try:
            return CacheEntry.from_json(raw)
        except ValueError:
            logger.debug("Discarding corrupt cache entry")
            return None

    async def _load(self, key: str) -> CacheEntry | None:
        """Read and validate an entry, deleting it when invalid."""
        try:
            raw = await self._backend.get_item(key)
        except StorageError as e:
            logger.debug("Cache read failed, treating as miss: {}", e)
            return None
        if raw is None:
            return None

        if not key.startswith(self.version_prefix):
            await self._remove(key)
            return None

        entry = self._parse(raw)
        if entry is None:
            await self._remove(key)
        return entry

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> CacheEntry | None:
        """Get a fresh, valid entry.

        Corrupt, expired and other-version entries are deleted and reported
        as a miss.

        Args:
            key: Cache key

        Returns:
            CacheEntry, or None on a miss
        """
        entry = await self._load(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock(), self._ttl_seconds):
            logger.debug("Cache entry expired")
            await self._remove(key)
            return None
        return entry

    # -------------------------------------------------------------------------
    # Write (best-effort)
    # -------------------------------------------------------------------------

    async def _write(self, key: str, entry: CacheEntry) -> CacheWriteResult:
        try:
            await self._backend.set_item(key, entry.to_json())
        except (StorageError, OSError) as e:
            logger.debug("Cache write failed: {}", e)
            return CacheWriteResult(key=key, success=False, error=str(e))
        return CacheWriteResult(key=key, success=True)

    async def put(
        self,
        key: str,
        records: list[PullRequest],
        rate_limit: RateLimitInfo | None,
        all_pr_counts: AllPRCounts | None = None,
        all_merged_prs: list[PullRequest] | None = None,
    ) -> CacheWriteResult:
        """Store an acquisition result stamped with the current time.

        Never raises on storage failure.

        Args:
            key: Cache key
            records: Agent PRs
            rate_limit: Latest quota reading
            all_pr_counts: Repository-wide counts (if fetched)
            all_merged_prs: Merged PR sample (if fetched)

        Returns:
            CacheWriteResult describing the outcome
        """
        entry = CacheEntry(
            data=records,
            timestamp=self._clock(),
            rate_limit_info=rate_limit,
            all_pr_counts=all_pr_counts,
            all_merged_prs=all_merged_prs,
        )
        return await self._write(key, entry)

    async def update_aggregates(
        self,
        key: str,
        counts: AllPRCounts,
        merged_records: list[PullRequest],
        rate_limit: RateLimitInfo | None = None,
    ) -> CacheWriteResult:
        """Attach comparison aggregates to an existing entry.

        The entry keeps its original timestamp. Does nothing when the entry
        is missing or invalid. Never raises on storage failure.

        Args:
            key: Cache key
            counts: Repository-wide counts
            merged_records: Merged PR sample
            rate_limit: Newer quota reading (kept unchanged when None)

        Returns:
            CacheWriteResult describing the outcome
        """
        entry = await self._load(key)
        if entry is None:
            return CacheWriteResult(key=key, success=False, error="no cached entry")

        update: dict[str, object] = {
            "all_pr_counts": counts,
            "all_merged_prs": merged_records,
        }
        if rate_limit is not None:
            update["rate_limit_info"] = rate_limit
        return await self._write(key, entry.model_copy(update=update))

    # -------------------------------------------------------------------------
    # Maintenance
    # -------------------------------------------------------------------------

    async def sweep_expired(self, force: bool = False) -> int:
        """Remove expired, corrupt and other-version entries under the prefix.

        Runs at most once per sweep interval unless forced.

        Args:
            force: Run even if a sweep ran recently

        Returns:
            Number of keys removed
        """
        now = self._clock()
        if (
            not force
            and self._last_sweep is not None
            and now - self._last_sweep < self._sweep_interval_seconds
        ):
            return 0
        self._last_sweep = now

        try:
            keys = await self._backend.keys()
        except StorageError as e:
            logger.debug("Cache sweep skipped: {}", e)
            return 0

        removed = 0
        for key in keys:
            if not key.startswith(self._prefix):
                continue
            if key.startswith(self.version_prefix):
                try:
                    raw = await self._backend.get_item(key)
                except StorageError as e:
                    logger.debug("Cache sweep could not read key: {}", e)
                    continue
                if raw is None:
                    continue
                entry = self._parse(raw)
                if entry is not None and not entry.is_expired(now, self._ttl_seconds):
                    continue
            if await self._remove(key):
                removed += 1

        if removed:
            logger.debug("Cache sweep removed {} key(s)", removed)
        return removed

    async def clear(self) -> int:
        """Remove every key under the prefix, regardless of version.

        Returns:
            Number of keys removed
        """
        keys = [key for key in await self._backend.keys() if key.startswith(self._prefix)]
        for key in keys:
            await self._backend.remove_item(key)
        logger.info("Cleared {} cache key(s)", len(keys))
        return len(keys)
