"""Pydantic schemas for GitHub API rate limit data.

Quota metadata arrives in two shapes:
- x-ratelimit-* response headers (REST Search API, per-minute request budget)
- the `rateLimit` selection of a GraphQL response (hourly point budget)

Both are normalized into RateLimitInfo.
"""

import time
from datetime import UTC, datetime
from enum import StrEnum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Any limit at or above this is assumed to be the GraphQL point budget.
# Only used for payloads that predate the explicit transport flag.
GRAPHQL_LIMIT_THRESHOLD = 100

# Unauthenticated search gets 10 requests/minute; anything above means a token.
AUTHENTICATED_LIMIT_THRESHOLD = 10


class TransportKind(StrEnum):
    """Upstream protocol a quota reading came from."""

    REST = "rest"
    GRAPHQL = "graphql"


class RateLimitStatus(StrEnum):
    """Rate limit health status.

    - GOOD: > 50% remaining
    - WARNING: > 20% remaining
    - LOW: 20% or less remaining
    """

    GOOD = "good"
    WARNING = "warning"
    LOW = "low"


class RateLimitInfo(BaseModel):
    """Normalized quota reading from either transport.

    `reset` is an absolute epoch timestamp in seconds.
    """

    model_config = ConfigDict(frozen=True)

    limit: int = Field(ge=0, description="Quota ceiling for the current window")
    remaining: int = Field(ge=0, description="Quota remaining in the current window")
    reset: int = Field(ge=0, description="Epoch seconds when the window resets")
    used: int = Field(description="Quota consumed in the current window")
    transport: TransportKind = Field(description="Transport that reported this reading")

    @classmethod
    def infer_transport(cls, limit: int) -> TransportKind:
        """Guess the transport from the magnitude of the limit.

        REST search allows 10-30 requests per minute while GraphQL allows
        5,000 points per hour, so the limit value separates them in practice.
        """
        return TransportKind.GRAPHQL if limit >= GRAPHQL_LIMIT_THRESHOLD else TransportKind.REST

    @property
    def reset_at(self) -> datetime:
        """UTC datetime when the window resets."""
        return datetime.fromtimestamp(self.reset, tz=UTC)

    def seconds_until_reset(self, now: float | None = None) -> int:
        """Seconds until the window resets (0 if already past)."""
        current = time.time() if now is None else now
        return max(0, int(self.reset - current))

    @computed_field  # type: ignore[prop-decorator]
    @property
    def usage_percent(self) -> int:
        """Percentage of quota consumed, clamped to 0-100."""
        if self.limit <= 0:
            return 0
        return max(0, min(100, round(self.used / self.limit * 100)))

    @property
    def is_authenticated(self) -> bool:
        """Whether the reading implies an authenticated caller."""
        return self.limit > AUTHENTICATED_LIMIT_THRESHOLD

    @property
    def is_exhausted(self) -> bool:
        """Whether no quota remains."""
        return self.remaining == 0

    @property
    def status(self) -> RateLimitStatus:
        """Health status based on the remaining fraction."""
        if self.remaining > self.limit * 0.5:
            return RateLimitStatus.GOOD
        if self.remaining > self.limit * 0.2:
            return RateLimitStatus.WARNING
        return RateLimitStatus.LOW

    @property
    def unit_label(self) -> str:
        """Quota unit wording for display."""
        if self.transport == TransportKind.GRAPHQL:
            return "points this hour"
        return "requests this minute"

    def to_cache_dict(self) -> dict[str, int | str]:
        """Serialize for the cache envelope."""
        return {
            "limit": self.limit,
            "remaining": self.remaining,
            "reset": self.reset,
            "used": self.used,
            "transport": self.transport.value,
        }

    @classmethod
    def from_cache_dict(cls, data: dict[str, object]) -> Self:
        """Parse a cache envelope value, inferring the transport if missing."""
        payload = dict(data)
        if "transport" not in payload:
            limit = payload.get("limit")
            payload["transport"] = cls.infer_transport(limit if isinstance(limit, int) else 0)
        return cls.model_validate(payload)
