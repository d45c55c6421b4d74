"""Result cache module.

This module provides:
- CacheStore: Versioned TTL cache with best-effort writes
- CacheEntry: Stored envelope schema
- Backends: MemoryKeyValueStore, DatabaseKeyValueStore
"""

from .backends import (
    DatabaseKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    StorageError,
    StorageQuotaExceededError,
)
from .entry import CacheEntry
from .keys import DEFAULT_CACHE_VERSION, DEFAULT_KEY_PREFIX, build_cache_key, version_prefix
from .store import CacheStore, CacheWriteResult

__all__ = [
    # Store
    "CacheStore",
    "CacheWriteResult",
    "CacheEntry",
    # Keys
    "DEFAULT_CACHE_VERSION",
    "DEFAULT_KEY_PREFIX",
    "build_cache_key",
    "version_prefix",
    # Backends
    "DatabaseKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "StorageError",
    "StorageQuotaExceededError",
]
