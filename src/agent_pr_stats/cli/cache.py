"""Cache maintenance commands."""

import typer

from agent_pr_stats.cli.common import build_cache, console, run_async_command
from agent_pr_stats.config import get_settings
from agent_pr_stats.db import dispose_engine

app = typer.Typer(help="Inspect and maintain the result cache.")


@app.command()
def clear() -> None:
    """Remove every cached result, including entries from older cache versions.

    Examples:
        agentprs cache clear
    """

    async def _clear() -> int:
        store = build_cache(get_settings())
        try:
            return await store.clear()
        finally:
            await dispose_engine()

    removed = run_async_command(_clear(), error_prefix="Cache clear failed")
    console.print(f"[green]Removed {removed} cache entr{'y' if removed == 1 else 'ies'}.[/green]")


@app.command()
def sweep() -> None:
    """Remove expired, corrupt and outdated cache entries.

    Examples:
        agentprs cache sweep
    """

    async def _sweep() -> int:
        store = build_cache(get_settings())
        try:
            return await store.sweep_expired(force=True)
        finally:
            await dispose_engine()

    removed = run_async_command(_sweep(), error_prefix="Cache sweep failed")
    console.print(f"[green]Swept {removed} cache entr{'y' if removed == 1 else 'ies'}.[/green]")
