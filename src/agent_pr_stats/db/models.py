"""SQLAlchemy ORM models for the persistent cache store."""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CacheRecord(Base):
    """One key/value pair of the result cache.

    The value is the serialized JSON envelope; validation and expiry are
    handled by the cache store, not the database.
    """

    __tablename__ = "cache_entries"

    key: Mapped[str] = mapped_column(String(512), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CacheRecord(key={self.key!r}, size={len(self.value)})>"
