"""Per-day chart series."""

from collections.abc import Iterable
from datetime import UTC, date, timedelta

from pydantic import BaseModel, Field

from agent_pr_stats.schemas import PRStatus, PullRequest


class ChartSeries(BaseModel):
    """Parallel per-day series of merged, closed and open PR counts."""

    dates: list[date] = Field(default_factory=list)
    merged: list[int] = Field(default_factory=list)
    closed: list[int] = Field(default_factory=list)
    open: list[int] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.dates)


def _created_day(pr: PullRequest) -> date:
    """UTC calendar day on which a PR was opened."""
    return pr.created_at.astimezone(UTC).date()


def bucket_by_date(
    records: Iterable[PullRequest],
    from_date: date | None = None,
    to_date: date | None = None,
) -> ChartSeries:
    """Group PRs by the UTC day they were created.

    With both bounds given, every day in the inclusive range gets an entry
    (zero when empty) and records outside the range are ignored. Otherwise
    only days that have records appear, in ascending order.

    Args:
        records: PRs to bucket
        from_date: First day of the range
        to_date: Last day of the range (inclusive)

    Returns:
        ChartSeries with one entry per day
    """
    by_day: dict[date, dict[PRStatus, int]] = {}
    for pr in records:
        counts = by_day.setdefault(
            _created_day(pr), {PRStatus.MERGED: 0, PRStatus.CLOSED: 0, PRStatus.OPEN: 0}
        )
        counts[pr.status] += 1

    if from_date is not None and to_date is not None:
        days = [from_date + timedelta(days=i) for i in range((to_date - from_date).days + 1)]
    else:
        days = sorted(by_day)

    empty = {PRStatus.MERGED: 0, PRStatus.CLOSED: 0, PRStatus.OPEN: 0}
    return ChartSeries(
        dates=days,
        merged=[by_day.get(day, empty)[PRStatus.MERGED] for day in days],
        closed=[by_day.get(day, empty)[PRStatus.CLOSED] for day in days],
        open=[by_day.get(day, empty)[PRStatus.OPEN] for day in days],
    )
