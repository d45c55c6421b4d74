"""PR classification, filtering and sorting."""

import math
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from agent_pr_stats.schemas import PRFilterStatus, PRState, PRStatus, PullRequest


class PRCounts(BaseModel):
    """Status breakdown of a set of PRs.

    merged + closed + open always equals total.
    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(ge=0)
    merged: int = Field(ge=0)
    closed: int = Field(ge=0, description="Closed without merge")
    open: int = Field(ge=0)
    merge_rate: int = Field(ge=0, le=100, description="Merged share in whole percent")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def get_pr_status(pr: PullRequest) -> PRStatus:
    """Display status: merged wins over the raw state."""
    return pr.status


def classify(records: Iterable[PullRequest]) -> PRCounts:
    """Classify PRs into merged, closed-without-merge and open.

    A record with a merge timestamp counts as merged whatever its state.

    Args:
        records: PRs to classify

    Returns:
        PRCounts with the merge rate rounded half-up (0 when empty)
    """
    merged = closed = opened = total = 0
    for pr in records:
        total += 1
        if pr.merged_at is not None:
            merged += 1
        elif pr.state == PRState.CLOSED:
            closed += 1
        else:
            opened += 1

    merge_rate = round_half_up(merged / total * 100) if total else 0
    return PRCounts(total=total, merged=merged, closed=closed, open=opened, merge_rate=merge_rate)


def filter_prs(
    records: Iterable[PullRequest],
    status: PRFilterStatus | str = PRFilterStatus.ALL,
    search_text: str = "",
) -> list[PullRequest]:
    """Filter PRs by display status and a case-insensitive title substring.

    Args:
        records: PRs to filter
        status: "all" or a display status
        search_text: Title substring (blank matches everything)

    Returns:
        Matching PRs in their original order
    """
    status = PRFilterStatus(status)
    filtered = list(records)

    if status != PRFilterStatus.ALL:
        filtered = [pr for pr in filtered if pr.status.value == status.value]

    query = search_text.strip().lower()
    if query:
        filtered = [pr for pr in filtered if query in (pr.title or "").lower()]

    return filtered


def sort_prs_by_date(records: Iterable[PullRequest]) -> list[PullRequest]:
    """Sort PRs by creation time, newest first (stable for ties)."""
    return sorted(records, key=lambda pr: pr.created_at, reverse=True)
