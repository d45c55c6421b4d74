"""Tests for rate limit extraction from REST headers and GraphQL payloads."""

import pytest

from agent_pr_stats.github.rate_limit import (
    RateLimitStatus,
    TransportKind,
    extract_rate_limit,
    format_countdown,
    rate_limit_from_graphql,
    rate_limit_status,
)
from tests.conftest import NOW, RESET_EPOCH
from tests.factories import make_rate_limit
from tests.fixtures.rate_limit_responses import (
    GRAPHQL_RATE_LIMIT_BAD_RESET,
    GRAPHQL_RATE_LIMIT_HEALTHY,
    GRAPHQL_RATE_LIMIT_MISSING_REMAINING,
    GRAPHQL_RATE_LIMIT_WITHOUT_USED,
    HEADERS_EXHAUSTED,
    HEADERS_HEALTHY,
    HEADERS_MALFORMED,
    HEADERS_MALFORMED_USED,
    HEADERS_MIXED_CASE,
    HEADERS_PARTIAL,
    HEADERS_WITHOUT_USED,
)


class TestExtractRateLimit:
    """Tests for extract_rate_limit (REST headers)."""

    def test_healthy_headers(self) -> None:
        info = extract_rate_limit(HEADERS_HEALTHY)

        assert info is not None
        assert info.limit == 30
        assert info.remaining == 28
        assert info.used == 2
        assert info.reset == RESET_EPOCH
        assert info.transport == TransportKind.REST

    def test_used_derived_when_absent(self) -> None:
        info = extract_rate_limit(HEADERS_WITHOUT_USED)
        assert info is not None
        assert info.used == 5

    def test_header_names_case_insensitive(self) -> None:
        info = extract_rate_limit(HEADERS_MIXED_CASE)
        assert info is not None
        assert (info.limit, info.remaining, info.used) == (30, 20, 10)

    def test_accepts_header_pairs(self) -> None:
        info = extract_rate_limit(list(HEADERS_HEALTHY.items()))
        assert info is not None
        assert info.remaining == 28

    def test_exhausted(self) -> None:
        info = extract_rate_limit(HEADERS_EXHAUSTED)
        assert info is not None
        assert info.is_exhausted

    @pytest.mark.parametrize(
        "headers",
        [HEADERS_PARTIAL, HEADERS_MALFORMED, HEADERS_MALFORMED_USED, {}, None],
        ids=["partial", "malformed", "malformed-used", "empty", "none"],
    )
    def test_unavailable(self, headers) -> None:
        """Missing or unparseable metadata is 'unavailable', never an error."""
        assert extract_rate_limit(headers) is None


class TestRateLimitFromGraphQL:
    """Tests for rate_limit_from_graphql."""

    def test_healthy_payload(self) -> None:
        info = rate_limit_from_graphql(GRAPHQL_RATE_LIMIT_HEALTHY)

        assert info is not None
        assert info.limit == 5000
        assert info.remaining == 4990
        assert info.used == 10
        assert info.reset == RESET_EPOCH
        assert info.transport == TransportKind.GRAPHQL

    def test_used_derived_when_absent(self) -> None:
        info = rate_limit_from_graphql(GRAPHQL_RATE_LIMIT_WITHOUT_USED)
        assert info is not None
        assert info.used == 1000

    @pytest.mark.parametrize(
        "payload",
        [GRAPHQL_RATE_LIMIT_BAD_RESET, GRAPHQL_RATE_LIMIT_MISSING_REMAINING, None, "oops"],
        ids=["bad-reset", "missing-remaining", "none", "not-a-dict"],
    )
    def test_unavailable(self, payload) -> None:
        assert rate_limit_from_graphql(payload) is None


class TestFormatCountdown:
    """Tests for format_countdown."""

    def test_minutes_and_seconds(self) -> None:
        assert format_countdown(RESET_EPOCH, now=RESET_EPOCH - 245) == "4:05"

    def test_full_hour(self) -> None:
        assert format_countdown(RESET_EPOCH, now=NOW) == "60:00"

    def test_clamped_at_zero(self) -> None:
        assert format_countdown(RESET_EPOCH, now=RESET_EPOCH + 30) == "0:00"


class TestRateLimitStatusHelper:
    """Tests for rate_limit_status."""

    def test_none(self) -> None:
        assert rate_limit_status(None) is None

    def test_status(self) -> None:
        assert rate_limit_status(make_rate_limit(limit=30, remaining=3)) == RateLimitStatus.LOW
