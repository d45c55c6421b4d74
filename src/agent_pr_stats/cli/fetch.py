"""Fetch and compare commands."""

from __future__ import annotations

import json
from datetime import date
from typing import Annotated

import typer

from agent_pr_stats.acquisition import AcquisitionOrchestrator, ComparisonResult
from agent_pr_stats.analytics import (
    bucket_by_date,
    classify,
    filter_prs,
    paginate,
    response_time_metrics,
    sort_prs_by_date,
)
from agent_pr_stats.cli.common import (
    ConsoleProgress,
    FromDateOption,
    NoPersistOption,
    OutputFormat,
    OutputFormatOption,
    RepoArgument,
    ToDateOption,
    TokenOption,
    build_cache,
    console,
    run_async_command,
    validate_request_input,
)
from agent_pr_stats.cli.render import (
    build_fetch_payload,
    print_daily,
    print_pr_page,
    print_rate_limit,
    print_response_times,
    print_summary,
)
from agent_pr_stats.config import get_settings
from agent_pr_stats.db import dispose_engine
from agent_pr_stats.github import NullProgress
from agent_pr_stats.schemas import PRFilterStatus


def fetch(
    repo: RepoArgument,
    from_date: FromDateOption,
    to_date: ToDateOption,
    token: TokenOption = None,
    compare: Annotated[
        bool,
        typer.Option("--compare", "-c", help="Include repository-wide comparison statistics"),
    ] = False,
    status: Annotated[
        PRFilterStatus,
        typer.Option("--status", "-s", help="Only list PRs with this status"),
    ] = PRFilterStatus.ALL,
    search: Annotated[
        str,
        typer.Option("--search", help="Only list PRs whose title contains this text"),
    ] = "",
    page: Annotated[
        int,
        typer.Option("--page", "-p", min=1, help="Page of the PR list to show"),
    ] = 1,
    daily: Annotated[
        bool,
        typer.Option("--daily", "-d", help="Show the per-day breakdown"),
    ] = False,
    output_format: OutputFormatOption = OutputFormat.TEXT,
    no_persist: NoPersistOption = False,
) -> None:
    """Fetch agent-authored PRs for a repository and date range.

    Examples:
        agentprs fetch octo-org/octo-repo --from 2026-01-01 --to 2026-01-31
        agentprs fetch octo-org/octo-repo --from 2026-01-01 --to 2026-01-31 --compare
        agentprs fetch octo-org/octo-repo --from 2026-01-01 --to 2026-01-31 -s merged -f json
    """
    owner, name = validate_request_input(repo, from_date, to_date)
    settings = get_settings()
    auth_token = token or settings.github_token or None
    start, end = date.fromisoformat(from_date), date.fromisoformat(to_date)

    async def _fetch() -> None:
        orchestrator = AcquisitionOrchestrator(
            cache=build_cache(settings, persist=not no_persist), settings=settings
        )
        progress = ConsoleProgress() if output_format == OutputFormat.TEXT else NullProgress()
        try:
            result = await orchestrator.fetch_prs(
                owner, name, start, end, token=auth_token, progress=progress
            )

            comparison: ComparisonResult | None = None
            if compare:
                if result.all_pr_counts is not None and result.all_merged_prs is not None:
                    comparison = ComparisonResult(
                        all_pr_counts=result.all_pr_counts,
                        all_merged_prs=result.all_merged_prs,
                        rate_limit_info=result.rate_limit_info,
                    )
                else:
                    comparison = await orchestrator.fetch_comparison_data(
                        owner, name, start, end, token=auth_token
                    )
        finally:
            if not no_persist:
                await dispose_engine()

        counts = classify(result.records)
        metrics = response_time_metrics(result.records)
        series = bucket_by_date(result.records, start, end)
        listed = sort_prs_by_date(filter_prs(result.records, status, search))
        pr_page = paginate(listed, page)
        comparison_metrics = (
            response_time_metrics(comparison.all_merged_prs) if comparison is not None else None
        )

        if output_format == OutputFormat.JSON:
            payload = build_fetch_payload(
                owner=owner,
                repo=name,
                from_date=start,
                to_date=end,
                result=result,
                counts=counts,
                metrics=metrics,
                series=series,
                page=pr_page,
                comparison=comparison,
                comparison_metrics=comparison_metrics,
            )
            console.print_json(json.dumps(payload))
            return

        cache_note = " [dim](from cache)[/dim]" if result.from_cache else ""
        console.print(f"\n[bold]{owner}/{name}[/bold] {start}..{end}{cache_note}")
        print_summary(console, "Agent PRs", counts, comparison)
        latest = comparison.rate_limit_info if comparison is not None else None
        print_rate_limit(console, latest or result.rate_limit_info)
        print_response_times(console, metrics, comparison_metrics)
        if daily:
            print_daily(console, series)
        print_pr_page(console, pr_page)

    run_async_command(_fetch(), error_prefix="Fetch failed")


def compare(
    repo: RepoArgument,
    from_date: FromDateOption,
    to_date: ToDateOption,
    token: TokenOption = None,
    output_format: OutputFormatOption = OutputFormat.TEXT,
    no_persist: NoPersistOption = False,
) -> None:
    """Show repository-wide comparison statistics (all authors).

    Examples:
        agentprs compare octo-org/octo-repo --from 2026-01-01 --to 2026-01-31
    """
    owner, name = validate_request_input(repo, from_date, to_date)
    settings = get_settings()
    auth_token = token or settings.github_token or None
    start, end = date.fromisoformat(from_date), date.fromisoformat(to_date)

    async def _compare() -> None:
        orchestrator = AcquisitionOrchestrator(
            cache=build_cache(settings, persist=not no_persist), settings=settings
        )
        try:
            result = await orchestrator.fetch_comparison_data(
                owner, name, start, end, token=auth_token
            )
        finally:
            if not no_persist:
                await dispose_engine()

        metrics = response_time_metrics(result.all_merged_prs)
        if output_format == OutputFormat.JSON:
            console.print_json(
                json.dumps(
                    {
                        "repository": f"{owner}/{name}",
                        "from": start.isoformat(),
                        "to": end.isoformat(),
                        "counts": result.all_pr_counts.model_dump(),
                        "merged_sample_size": len(result.all_merged_prs),
                        "response_time": metrics.model_dump() if metrics else None,
                    }
                )
            )
            return

        counts = result.all_pr_counts
        console.print(f"\n[bold]{owner}/{name}[/bold] {start}..{end} (all authors)")
        console.print(
            f"  Total: {counts.total}  Merged: {counts.merged}  "
            f"Closed: {counts.closed}  Open: {counts.open}"
        )
        print_rate_limit(console, result.rate_limit_info)
        print_response_times(console, metrics)

    run_async_command(_compare(), error_prefix="Compare failed")
