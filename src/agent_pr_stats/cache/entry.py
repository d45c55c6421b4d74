"""Cache entry schema and its JSON envelope."""

from __future__ import annotations

import json
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agent_pr_stats.github.rate_limit import RateLimitInfo
from agent_pr_stats.schemas import AllPRCounts, PullRequest


class CacheEntry(BaseModel):
    """Stored result of one acquisition.

    Serialized as `{data, timestamp, rateLimitInfo, allPRCounts?, allMergedPRs?}`.
    `rateLimitInfo` must be present but may be null; the comparison fields
    are optional and attached later by a lazy comparison fetch.
    """

    model_config = ConfigDict(populate_by_name=True)

    data: list[PullRequest] = Field(description="Agent PRs for the request")
    timestamp: float = Field(ge=0, description="Epoch seconds when the entry was written")
    rate_limit_info: RateLimitInfo | None = Field(
        alias="rateLimitInfo", description="Latest quota reading at write time"
    )
    all_pr_counts: AllPRCounts | None = Field(
        default=None, alias="allPRCounts", description="Repository-wide counts"
    )
    all_merged_prs: list[PullRequest] | None = Field(
        default=None, alias="allMergedPRs", description="Merged PR sample (all authors)"
    )

    @field_validator("rate_limit_info", mode="before")
    @classmethod
    def parse_rate_limit(cls, v: Any) -> Any:
        """Accept envelopes written before the transport flag existed."""
        if isinstance(v, dict) and "transport" not in v:
            return RateLimitInfo.from_cache_dict(v)
        return v

    @property
    def has_comparison(self) -> bool:
        """Whether both comparison aggregates are attached."""
        return self.all_pr_counts is not None and self.all_merged_prs is not None

    def is_expired(self, now: float, ttl_seconds: float) -> bool:
        """Whether the entry is older than the TTL."""
        return now - self.timestamp > ttl_seconds

    def to_envelope(self) -> dict[str, Any]:
        """Build the JSON-ready envelope dict."""
        envelope: dict[str, Any] = {
            "data": [pr.model_dump(mode="json", by_alias=True) for pr in self.data],
            "timestamp": self.timestamp,
            "rateLimitInfo": self.rate_limit_info.to_cache_dict() if self.rate_limit_info else None,
        }
        if self.all_pr_counts is not None:
            envelope["allPRCounts"] = self.all_pr_counts.model_dump()
        if self.all_merged_prs is not None:
            envelope["allMergedPRs"] = [
                pr.model_dump(mode="json", by_alias=True) for pr in self.all_merged_prs
            ]
        return envelope

    def to_json(self) -> str:
        """Serialize to the stored JSON string."""
        return json.dumps(self.to_envelope(), separators=(",", ":"))

    @classmethod
    def from_json(cls, raw: str) -> Self:
        """Parse a stored JSON string.

        Raises:
            ValueError: If the string is not JSON or not a valid envelope
                (pydantic's ValidationError is a ValueError)
        """
        return cls.model_validate(json.loads(raw))
