"""Progress reporting for PR acquisition.

The orchestrator reports two kinds of events through a ProgressReporter:
- phase changes ("Fetching via GraphQL API...")
- page progress ("Fetched 200 of 350 agent PRs")

Callers plug in whatever renders them (a rich status line, a log, nothing).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from agent_pr_stats.logging import get_logger

logger = get_logger(__name__)


class ProgressKind(StrEnum):
    """Kind of progress event."""

    PHASE = "phase"
    PAGE = "page"


@dataclass(frozen=True)
class ProgressUpdate:
    """A single progress event."""

    kind: ProgressKind
    message: str
    detail: str | None = None
    fetched: int = 0
    total: int = 0

    @property
    def progress_percent(self) -> float:
        """Completion percentage (0-100); 0 when the total is unknown."""
        if self.total <= 0:
            return 0.0
        return min(100.0, self.fetched / self.total * 100)


class ProgressReporter(Protocol):
    """Sink for acquisition progress events."""

    def update_phase(self, phase: str, detail: str | None = None) -> None: ...

    def update_progress(self, fetched: int, total: int, message: str) -> None: ...


class NullProgress:
    """Reporter that discards every event."""

    def update_phase(self, phase: str, detail: str | None = None) -> None:
        pass

    def update_progress(self, fetched: int, total: int, message: str) -> None:
        pass


class LoggingProgress:
    """Reporter that writes events to the log at debug level."""

    def update_phase(self, phase: str, detail: str | None = None) -> None:
        if detail:
            logger.debug("{} ({})", phase, detail)
        else:
            logger.debug(phase)

    def update_progress(self, fetched: int, total: int, message: str) -> None:
        logger.debug(message)


ProgressCallback = Callable[[ProgressUpdate], None]


class CallbackProgress:
    """Reporter that forwards events as ProgressUpdate objects.

    Usage:
        updates: list[ProgressUpdate] = []
        reporter = CallbackProgress(updates.append)
    """

    def __init__(self, callback: ProgressCallback) -> None:
        self._callback = callback

    def update_phase(self, phase: str, detail: str | None = None) -> None:
        self._callback(ProgressUpdate(kind=ProgressKind.PHASE, message=phase, detail=detail))

    def update_progress(self, fetched: int, total: int, message: str) -> None:
        self._callback(
            ProgressUpdate(kind=ProgressKind.PAGE, message=message, fetched=fetched, total=total)
        )
