"""Common CLI option types and helpers.

This module centralizes reusable CLI options and provides:
- `run_async_command`: Unified async execution with error handling for CLI commands
- `ConsoleProgress`: Progress reporter printing acquisition phases to stderr
- `build_cache`: Cache store construction from settings
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from enum import Enum
from typing import Annotated, TypeVar

import typer
from rich.console import Console

from agent_pr_stats.cache import CacheStore, DatabaseKeyValueStore, MemoryKeyValueStore
from agent_pr_stats.config import Settings
from agent_pr_stats.github import RequestCancelledError

# Shared console instances for CLI output
console = Console()
err_console = Console(stderr=True)

T = TypeVar("T")


class OutputFormat(str, Enum):
    """Output format for CLI commands."""

    TEXT = "text"
    """Human-readable text output."""

    JSON = "json"
    """Machine-readable JSON output."""


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Execute async code from synchronous CLI command with unified error handling.

    Uses asyncio.run() for clean event loop management. Prints user-friendly
    error messages and exits with code 1. A cancelled request exits quietly.

    Args:
        coro: Async coroutine to execute
        error_prefix: Prefix for error messages (default: "Error")

    Returns:
        Result from the coroutine

    Raises:
        typer.Exit: Re-raised from deliberate exits, or raised with code 1 on error
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        raise
    except RequestCancelledError:
        raise typer.Exit(1) from None
    except Exception as e:
        console.print(f"[red]{error_prefix}:[/red] {e}")
        raise typer.Exit(1) from None


class ConsoleProgress:
    """Progress reporter that prints phases and page progress to stderr."""

    def __init__(self, out: Console | None = None) -> None:
        self._out = out or err_console

    def update_phase(self, phase: str, detail: str | None = None) -> None:
        suffix = f" [dim]({detail})[/dim]" if detail else ""
        self._out.print(f"[bold]{phase}[/bold]{suffix}")

    def update_progress(self, fetched: int, total: int, message: str) -> None:
        self._out.print(f"  {message}")


def build_cache(settings: Settings, *, persist: bool = True) -> CacheStore:
    """Cache store backed by the cache database, or by memory when not persisting."""
    backend = DatabaseKeyValueStore() if persist else MemoryKeyValueStore()
    return CacheStore.from_settings(settings, backend)


RepoArgument = Annotated[
    str,
    typer.Argument(
        help="Repository in owner/repo format (e.g., octo-org/octo-repo)",
    ),
]

FromDateOption = Annotated[
    str,
    typer.Option(
        "--from",
        help="First day of the created-date range (YYYY-MM-DD)",
    ),
]

ToDateOption = Annotated[
    str,
    typer.Option(
        "--to",
        help="Last day of the created-date range, inclusive (YYYY-MM-DD)",
    ),
]

TokenOption = Annotated[
    str | None,
    typer.Option(
        "--token",
        "-t",
        help="GitHub token (defaults to GITHUB_TOKEN; enables the GraphQL API)",
    ),
]

OutputFormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format",
    ),
]

NoPersistOption = Annotated[
    bool,
    typer.Option(
        "--no-persist",
        help="Keep the cache in memory for this run only",
    ),
]


def validate_request_input(repo: str, from_date: str, to_date: str) -> tuple[str, str]:
    """Parse the repository and check the date range.

    Returns:
        Tuple of (owner, repo)

    Raises:
        typer.Exit(1): If the repository or the range is invalid
    """
    from agent_pr_stats.schemas import parse_repo_string, validate_date_range

    try:
        owner, name = parse_repo_string(repo)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    error = validate_date_range(from_date, to_date)
    if error:
        console.print(f"[red]Error:[/red] {error}")
        raise typer.Exit(1)
    return owner, name
