"""Merge latency statistics.

Latency is the time from a PR being opened to it being merged, in hours.
Only merged PRs with a finite, non-negative latency contribute.
"""

import math
import statistics
from collections.abc import Iterable

from pydantic import BaseModel, Field

from agent_pr_stats.schemas import PullRequest

from .classification import round_half_up

# (label, lower bound inclusive, upper bound exclusive) in hours
BUCKET_DEFINITIONS: tuple[tuple[str, float, float], ...] = (
    ("<1h", 0, 1),
    ("1-6h", 1, 6),
    ("6-24h", 6, 24),
    ("1-3d", 24, 72),
    ("3-7d", 72, 168),
    ("7d+", 168, math.inf),
)


class ResponseTimeBucket(BaseModel):
    """Histogram bucket of merge latencies."""

    label: str
    count: int = Field(ge=0)


class ResponseTimeMetrics(BaseModel):
    """Summary of merge latencies (all values in hours)."""

    average: float
    median: float
    fastest: float
    slowest: float
    buckets: list[ResponseTimeBucket]
    total_merged: int = Field(ge=1, description="Merged PRs that contributed")


def merge_latencies(records: Iterable[PullRequest]) -> list[float]:
    """Hours from open to merge for every merged PR with a usable latency."""
    hours: list[float] = []
    for pr in records:
        if pr.merged_at is None:
            continue
        latency = (pr.merged_at - pr.created_at).total_seconds() / 3600
        if math.isfinite(latency) and latency >= 0:
            hours.append(latency)
    return hours


def response_time_metrics(records: Iterable[PullRequest]) -> ResponseTimeMetrics | None:
    """Compute merge latency statistics.

    Negative latencies (clock skew, bad data) are dropped, never clamped.

    Args:
        records: PRs of any status

    Returns:
        ResponseTimeMetrics, or None when no merged PR has a usable latency
    """
    hours = merge_latencies(records)
    if not hours:
        return None

    buckets = [
        ResponseTimeBucket(label=label, count=sum(1 for h in hours if low <= h < high))
        for label, low, high in BUCKET_DEFINITIONS
    ]
    return ResponseTimeMetrics(
        average=statistics.fmean(hours),
        median=statistics.median(hours),
        fastest=min(hours),
        slowest=max(hours),
        buckets=buckets,
        total_merged=len(hours),
    )


def format_duration(hours: float) -> str:
    """Format a duration in hours for display.

    Under an hour shows whole minutes, under a day shows hours with one
    decimal, otherwise days with one decimal.

    Examples:
        0.5 -> "30 min", 5.26 -> "5.3 hours", 48 -> "2.0 days"
    """
    if not math.isfinite(hours):
        return "0 min"
    hours = max(0.0, hours)

    if hours < 1:
        minutes = round_half_up(hours * 60)
        if minutes >= 60:
            return "1.0 hours"
        return f"{minutes} min"
    if hours < 24:
        if float(f"{hours:.1f}") >= 24:
            return f"{hours / 24:.1f} days"
        return f"{hours:.1f} hours"
    return f"{hours / 24:.1f} days"
