"""Rendering of acquisition results for the terminal and for JSON output."""

from __future__ import annotations

from datetime import date
from typing import Any

from rich.console import Console
from rich.table import Table

from agent_pr_stats.acquisition import ComparisonResult, FetchResult
from agent_pr_stats.analytics import (
    ChartSeries,
    Page,
    PRCounts,
    ResponseTimeMetrics,
    format_duration,
    format_pr_number,
    page_numbers_to_show,
)
from agent_pr_stats.github import RateLimitInfo, RateLimitStatus, format_countdown
from agent_pr_stats.schemas import PRStatus, PullRequest

_STATUS_STYLES = {
    PRStatus.MERGED: "green",
    PRStatus.CLOSED: "red",
    PRStatus.OPEN: "blue",
}


def _status_style(status: RateLimitStatus) -> str:
    """Get rich markup for a rate limit status."""
    match status:
        case RateLimitStatus.GOOD:
            return "[green]Good[/green]"
        case RateLimitStatus.WARNING:
            return "[yellow]Warning[/yellow]"
        case RateLimitStatus.LOW:
            return "[red]Low[/red]"
        case _:
            return str(status)


def _ratio(part: int, whole: int) -> str:
    return f"{part} / {whole}" if whole > 0 else f"{part} / -"


def merge_latency_hours(pr: PullRequest) -> float | None:
    """Hours from open to merge, or None for unmerged PRs."""
    if pr.merged_at is None:
        return None
    return (pr.merged_at - pr.created_at).total_seconds() / 3600


# -----------------------------------------------------------------------------
# Text output
# -----------------------------------------------------------------------------


def print_summary(
    console: Console,
    title: str,
    counts: PRCounts,
    comparison: ComparisonResult | None = None,
) -> None:
    """Print agent PR counts, optionally next to the repository totals."""
    table = Table(title=title)
    table.add_column("Metric")
    table.add_column("Agent PRs", justify="right")
    if comparison is not None:
        table.add_column("Agent / All", justify="right")

    all_counts = comparison.all_pr_counts if comparison is not None else None
    rows = [
        ("Total", counts.total, all_counts.total if all_counts else 0),
        ("Merged", counts.merged, all_counts.merged if all_counts else 0),
        ("Closed", counts.closed, all_counts.closed if all_counts else 0),
        ("Open", counts.open, all_counts.open if all_counts else 0),
    ]
    for label, value, whole in rows:
        if comparison is not None:
            table.add_row(label, str(value), _ratio(value, whole))
        else:
            table.add_row(label, str(value))
    table.add_row("Merge rate", f"{counts.merge_rate}%", *([""] if comparison is not None else []))
    console.print(table)


def print_rate_limit(console: Console, info: RateLimitInfo | None) -> None:
    """Print the latest quota reading."""
    if info is None:
        console.print("Rate limit: [dim]unavailable[/dim]")
        return
    auth = "authenticated" if info.is_authenticated else "unauthenticated"
    console.print(
        f"Rate limit: {info.remaining}/{info.limit} {info.unit_label} "
        f"({_status_style(info.status)}, {auth}), resets in {format_countdown(info.reset)}"
    )


def print_response_times(
    console: Console,
    metrics: ResponseTimeMetrics | None,
    others: ResponseTimeMetrics | None = None,
) -> None:
    """Print merge latency statistics and the histogram."""
    if metrics is None:
        console.print("Response time: [dim]no merged PRs[/dim]")
        return

    table = Table(title=f"Response time ({metrics.total_merged} merged)")
    table.add_column("Statistic")
    table.add_column("Agent PRs", justify="right")
    if others is not None:
        table.add_column("All merged PRs", justify="right")
    stats = [
        ("Average", metrics.average, others.average if others else 0.0),
        ("Median", metrics.median, others.median if others else 0.0),
        ("Fastest", metrics.fastest, others.fastest if others else 0.0),
        ("Slowest", metrics.slowest, others.slowest if others else 0.0),
    ]
    for label, value, other in stats:
        cells = [label, format_duration(value)]
        if others is not None:
            cells.append(format_duration(other))
        table.add_row(*cells)
    console.print(table)

    histogram = Table(title="Time to merge")
    histogram.add_column("Bucket")
    histogram.add_column("PRs", justify="right")
    for bucket in metrics.buckets:
        histogram.add_row(bucket.label, str(bucket.count))
    console.print(histogram)


def print_daily(console: Console, series: ChartSeries) -> None:
    """Print the per-day breakdown."""
    table = Table(title="PRs by day")
    table.add_column("Date")
    table.add_column("Merged", justify="right", style="green")
    table.add_column("Closed", justify="right", style="red")
    table.add_column("Open", justify="right", style="blue")
    for day, merged, closed, opened in zip(
        series.dates, series.merged, series.closed, series.open, strict=True
    ):
        table.add_row(day.isoformat(), str(merged), str(closed), str(opened))
    console.print(table)


def print_pr_page(console: Console, page: Page[PullRequest]) -> None:
    """Print one page of the PR list with page navigation."""
    if page.total_items == 0:
        console.print("[dim]No PRs match the current filters.[/dim]")
        return

    table = Table(title=f"Pull requests ({page.total_items})")
    table.add_column("Number", style="cyan")
    table.add_column("Title", max_width=60)
    table.add_column("Status")
    table.add_column("Created")
    table.add_column("Time to merge", justify="right")
    for pr in page.items:
        status = pr.status
        latency = merge_latency_hours(pr)
        table.add_row(
            format_pr_number(pr.number),
            pr.title or "",
            f"[{_STATUS_STYLES[status]}]{status.value.title()}[/{_STATUS_STYLES[status]}]",
            pr.created_at.strftime("%Y-%m-%d"),
            format_duration(latency) if latency is not None else "",
        )
    console.print(table)

    if page.total_pages > 1:
        links = " ".join(
            f"[bold]{n}[/bold]" if n == page.page else str(n)
            for n in page_numbers_to_show(page.page, page.total_pages)
        )
        console.print(f"Page {page.page} of {page.total_pages}: {links}")


# -----------------------------------------------------------------------------
# JSON output
# -----------------------------------------------------------------------------


def rate_limit_to_dict(info: RateLimitInfo | None) -> dict[str, Any] | None:
    """Serialize a quota reading with its derived status."""
    if info is None:
        return None
    return {
        **info.to_cache_dict(),
        "status": info.status.value,
        "authenticated": info.is_authenticated,
        "usage_percent": info.usage_percent,
    }


def series_to_dict(series: ChartSeries) -> dict[str, list[Any]]:
    """Serialize a per-day series."""
    return {
        "dates": [day.isoformat() for day in series.dates],
        "merged": series.merged,
        "closed": series.closed,
        "open": series.open,
    }


def build_fetch_payload(
    *,
    owner: str,
    repo: str,
    from_date: date,
    to_date: date,
    result: FetchResult,
    counts: PRCounts,
    metrics: ResponseTimeMetrics | None,
    series: ChartSeries,
    page: Page[PullRequest],
    comparison: ComparisonResult | None = None,
    comparison_metrics: ResponseTimeMetrics | None = None,
) -> dict[str, Any]:
    """Build the JSON document printed by `fetch --format json`."""
    payload: dict[str, Any] = {
        "repository": f"{owner}/{repo}",
        "from": from_date.isoformat(),
        "to": to_date.isoformat(),
        "from_cache": result.from_cache,
        "counts": counts.model_dump(),
        "rate_limit": rate_limit_to_dict(result.rate_limit_info),
        "response_time": metrics.model_dump() if metrics else None,
        "daily": series_to_dict(series),
        "page": page.page,
        "total_pages": page.total_pages,
        "prs": [
            {**pr.model_dump(mode="json", by_alias=True), "status": pr.status.value}
            for pr in page.items
        ],
    }
    if comparison is not None:
        payload["comparison"] = {
            "counts": comparison.all_pr_counts.model_dump(),
            "merged_sample_size": len(comparison.all_merged_prs),
            "response_time": comparison_metrics.model_dump() if comparison_metrics else None,
        }
    return payload
