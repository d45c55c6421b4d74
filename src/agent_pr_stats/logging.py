"""Logging configuration using loguru.

Console output shows the bound acquisition context (repository and date
range) next to each message. Standard library loggers used underneath
githubkit and the cache database are routed into loguru with their own
level policy.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger, Record

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_ACQUISITION = "acquisition"

_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[name]}:{function}:{line} | {extra} | {message}"
)


class InterceptHandler(logging.Handler):
    """Route standard library log records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _console_format(record: Record) -> str:
    extra = record["extra"]
    source = "{extra[name]}" if "name" in extra else "{name}"
    context = ""
    if "repo" in extra and "range" in extra:
        context = " <magenta>[{extra[repo]} {extra[range]}]</magenta>"
    elif "repo" in extra:
        context = " <magenta>[{extra[repo]}]</magenta>"
    return (
        "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | "
        f"<cyan>{source}</cyan>{context} - <level>{{message}}</level>\n{{exception}}"
    )


def _stdlib_levels(level: LogLevel) -> dict[str, int]:
    """Levels for third-party stdlib loggers at a given loguru level."""
    debugging = level in ("TRACE", "DEBUG")
    tracing = level == "TRACE"
    return {
        # httpx logs every request URL, search query included
        "httpx": logging.DEBUG if debugging else logging.WARNING,
        "httpcore": logging.DEBUG if tracing else logging.WARNING,
        "githubkit": logging.DEBUG if debugging else logging.WARNING,
        "sqlalchemy.engine": logging.INFO if tracing else logging.WARNING,
        "aiosqlite": logging.WARNING,
    }


def effective_level(level: LogLevel, *, verbose: bool = False, quiet: bool = False) -> LogLevel:
    """Resolve the configured level against the CLI flags (verbose wins)."""
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return level


def setup_logging(
    level: LogLevel = "INFO",
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> Logger:
    """Configure loguru sinks and stdlib interception.

    Args:
        level: Base log level from config
        verbose: Use DEBUG regardless of `level`
        quiet: Use WARNING regardless of `level`
        log_file: Optional path for a rotating DEBUG-level file sink
        rotation: When to rotate the log file (e.g., "10 MB", "1 day")
        retention: How long to keep rotated logs
        serialize: Write the file sink as JSON lines

    Returns:
        The configured logger
    """
    resolved = effective_level(level, verbose=verbose, quiet=quiet)

    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved,
        format=_console_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )
    if log_file:
        logger.add(
            log_file,
            level="DEBUG",
            format=_FILE_FORMAT,
            rotation=rotation,
            retention=retention,
            compression="gz",
            serialize=serialize,
            filter=lambda record: "name" in record["extra"],
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name, stdlib_level in _stdlib_levels(resolved).items():
        logging.getLogger(name).setLevel(stdlib_level)

    return logger


def get_logger(name: str) -> Logger:
    """Get a logger with `name` bound (typically the module's __name__)."""
    return logger.bind(name=name)


def bind_repo(owner: str, repo: str) -> Logger:
    """Logger carrying the repository being acquired."""
    return logger.bind(name=_ACQUISITION, repo=f"{owner}/{repo}")


def bind_request(owner: str, repo: str, from_date: str, to_date: str) -> Logger:
    """Logger carrying the repository and the created-date range of a request.

    Args:
        owner: Repository owner
        repo: Repository name
        from_date: Start of the range (YYYY-MM-DD)
        to_date: End of the range (YYYY-MM-DD)
    """
    return bind_repo(owner, repo).bind(range=f"{from_date}..{to_date}")
