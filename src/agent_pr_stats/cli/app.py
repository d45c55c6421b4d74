"""Main CLI application for Agent PR Stats."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from agent_pr_stats import __version__
from agent_pr_stats.cli import cache as cache_cmd
from agent_pr_stats.cli import fetch as fetch_cmd
from agent_pr_stats.config import get_settings
from agent_pr_stats.logging import setup_logging

app = typer.Typer(
    name="agentprs",
    help="Acceptance statistics for agent-authored GitHub pull requests.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"agentprs version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-error output (WARNING level).",
        ),
    ] = False,
) -> None:
    """Agent PR Stats - Fetch and summarize agent-authored PRs."""
    settings = get_settings()
    log_config = settings.logging

    # Setup logging with CLI overrides
    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=Path(log_config.log_file) if log_config.log_file else None,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )


app.command("fetch")(fetch_cmd.fetch)
app.command("compare")(fetch_cmd.compare)
app.add_typer(cache_cmd.app, name="cache")


if __name__ == "__main__":
    app()
