"""Repository-wide PR counts used for comparison statistics."""

from collections.abc import Collection
from typing import Self

from pydantic import BaseModel, Field


class AllPRCounts(BaseModel):
    """PR counts across all authors for a repository and date range.

    `closed` means closed without merge. It is never queried directly;
    it is derived from the other three counts to save one search request.
    """

    total: int = Field(default=0, ge=0, description="All PRs created in range")
    merged: int = Field(default=0, ge=0, description="Merged PRs")
    closed: int = Field(default=0, ge=0, description="Closed without merge")
    open: int = Field(default=0, ge=0, description="Still open")

    @classmethod
    def derive(cls, total: int, merged: int, open: int) -> Self:
        """
        Build counts with `closed` derived from the other three.

        Upstream counts come from separate searches and can disagree when the
        repository changes between them, so the derivation clamps at zero.

        Args:
            total: All PRs in range
            merged: Merged PRs in range
            open: Open PRs in range

        Returns:
            AllPRCounts with closed = max(0, total - merged - open)
        """
        return cls(
            total=max(0, total),
            merged=max(0, merged),
            open=max(0, open),
            closed=max(0, total - merged - open),
        )


def adjust_closed_count(counts: AllPRCounts, succeeded: Collection[str]) -> AllPRCounts:
    """Subtract merged PRs from a raw "closed" probe.

    GitHub's closed state includes merged PRs. When both probes succeeded the
    merged count is subtracted (clamped at zero); when only the closed probe
    succeeded its value cannot be trusted and is reset to zero.

    Args:
        counts: Counts where `closed` holds the raw is:closed probe value
        succeeded: Names of the probes that succeeded

    Returns:
        New AllPRCounts with an adjusted closed value
    """
    if "closed" in succeeded and "merged" in succeeded:
        return counts.model_copy(update={"closed": max(0, counts.closed - counts.merged)})
    if "closed" in succeeded:
        return counts.model_copy(update={"closed": 0})
    return counts.model_copy()
