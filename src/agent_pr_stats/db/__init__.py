"""Database module backing the persistent cache store."""

from agent_pr_stats.db.engine import (
    create_tables,
    dispose_engine,
    get_engine,
    make_session_factory,
)
from agent_pr_stats.db.models import Base, CacheRecord
from agent_pr_stats.db.repository import CacheRecordRepository

__all__ = [
    # Models
    "Base",
    "CacheRecord",
    # Repository
    "CacheRecordRepository",
    # Engine
    "create_tables",
    "dispose_engine",
    "get_engine",
    "make_session_factory",
]
