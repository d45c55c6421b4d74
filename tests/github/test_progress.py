"""Tests for progress reporters."""

from loguru import logger

from agent_pr_stats.github import (
    CallbackProgress,
    LoggingProgress,
    NullProgress,
    ProgressKind,
    ProgressUpdate,
)


class TestProgressUpdate:
    """Tests for ProgressUpdate."""

    def test_percent(self):
        update = ProgressUpdate(ProgressKind.PAGE, "Fetched 50 of 200", fetched=50, total=200)
        assert update.progress_percent == 25.0

    def test_percent_unknown_total(self):
        assert ProgressUpdate(ProgressKind.PAGE, "x", fetched=5, total=0).progress_percent == 0.0

    def test_percent_capped(self):
        update = ProgressUpdate(ProgressKind.PAGE, "x", fetched=120, total=100)
        assert update.progress_percent == 100.0


class TestReporters:
    """Tests for the stock reporters."""

    def test_null_progress_accepts_everything(self):
        reporter = NullProgress()
        reporter.update_phase("Fetching...", "detail")
        reporter.update_progress(1, 2, "Fetched 1 of 2")

    def test_callback_progress(self):
        updates: list[ProgressUpdate] = []
        reporter = CallbackProgress(updates.append)

        reporter.update_phase("Fetching via GraphQL API...", "Combined query")
        reporter.update_progress(100, 250, "Fetched 100 of 250 agent PRs")

        assert updates == [
            ProgressUpdate(
                kind=ProgressKind.PHASE,
                message="Fetching via GraphQL API...",
                detail="Combined query",
            ),
            ProgressUpdate(
                kind=ProgressKind.PAGE,
                message="Fetched 100 of 250 agent PRs",
                fetched=100,
                total=250,
            ),
        ]

    def test_logging_progress(self):
        messages: list[str] = []
        handler_id = logger.add(lambda msg: messages.append(str(msg)), level="DEBUG")
        try:
            reporter = LoggingProgress()
            reporter.update_phase("Loading from cache...", "Using cached data")
            reporter.update_progress(3, 3, "Fetched 3 of 3 agent PRs")
        finally:
            logger.remove(handler_id)

        output = "".join(messages)
        assert "Loading from cache... (Using cached data)" in output
        assert "Fetched 3 of 3 agent PRs" in output
