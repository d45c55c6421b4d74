"""Tests for the cache entry envelope."""

import json

import pytest

from agent_pr_stats.cache import CacheEntry
from agent_pr_stats.github import TransportKind
from agent_pr_stats.schemas import AllPRCounts
from tests.conftest import NOW, RESET_EPOCH
from tests.factories import make_merged_pr, make_pr, make_rate_limit


def make_entry(**overrides) -> CacheEntry:
    values = {
        "data": [make_pr(1), make_merged_pr(2)],
        "timestamp": NOW,
        "rate_limit_info": make_rate_limit(),
    }
    values.update(overrides)
    return CacheEntry(**values)


class TestEnvelope:
    """Tests for serialization to and from the stored JSON."""

    def test_envelope_keys(self):
        envelope = make_entry().to_envelope()

        assert set(envelope) == {"data", "timestamp", "rateLimitInfo"}
        assert envelope["rateLimitInfo"]["transport"] == "rest"
        assert envelope["data"][0]["html_url"].endswith("/pull/1")
        assert envelope["data"][0]["user"] == {"login": "Copilot"}

    def test_comparison_fields_present_when_set(self):
        entry = make_entry(
            all_pr_counts=AllPRCounts(total=4, merged=2, closed=1, open=1),
            all_merged_prs=[make_merged_pr(9)],
        )

        envelope = entry.to_envelope()

        assert envelope["allPRCounts"] == {"total": 4, "merged": 2, "closed": 1, "open": 1}
        assert len(envelope["allMergedPRs"]) == 1

    def test_null_rate_limit(self):
        envelope = make_entry(rate_limit_info=None).to_envelope()
        assert envelope["rateLimitInfo"] is None

    def test_json_round_trip(self):
        entry = make_entry(
            all_pr_counts=AllPRCounts(total=4, merged=2, closed=1, open=1),
            all_merged_prs=[make_merged_pr(9)],
        )

        restored = CacheEntry.from_json(entry.to_json())

        assert restored == entry
        assert restored.data[1].is_merged

    def test_rate_limit_info_is_required(self):
        raw = json.dumps({"data": [], "timestamp": NOW})

        with pytest.raises(ValueError):
            CacheEntry.from_json(raw)

    def test_invalid_json(self):
        with pytest.raises(ValueError):
            CacheEntry.from_json("{not json")

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            CacheEntry.from_json(
                json.dumps({"data": "nope", "timestamp": NOW, "rateLimitInfo": None})
            )


class TestLegacyRateLimit:
    """Envelopes written before readings carried a transport flag."""

    @pytest.mark.parametrize(
        ("limit", "expected"),
        [(30, TransportKind.REST), (10, TransportKind.REST), (5000, TransportKind.GRAPHQL)],
    )
    def test_transport_inferred_from_limit(self, limit, expected):
        raw = json.dumps(
            {
                "data": [],
                "timestamp": NOW,
                "rateLimitInfo": {"limit": limit, "remaining": 1, "reset": RESET_EPOCH, "used": 0},
            }
        )

        entry = CacheEntry.from_json(raw)

        assert entry.rate_limit_info is not None
        assert entry.rate_limit_info.transport == expected

    def test_explicit_transport_wins(self):
        raw = json.dumps(
            {
                "data": [],
                "timestamp": NOW,
                "rateLimitInfo": {
                    "limit": 5000,
                    "remaining": 1,
                    "reset": RESET_EPOCH,
                    "used": 0,
                    "transport": "rest",
                },
            }
        )

        entry = CacheEntry.from_json(raw)

        assert entry.rate_limit_info is not None
        assert entry.rate_limit_info.transport == TransportKind.REST


class TestExpiry:
    """Tests for is_expired and has_comparison."""

    def test_not_expired_at_exact_ttl(self):
        assert make_entry().is_expired(NOW + 300, 300) is False

    def test_expired_after_ttl(self):
        assert make_entry().is_expired(NOW + 300.001, 300) is True

    def test_has_comparison_requires_both(self):
        counts = AllPRCounts(total=1, merged=1, closed=0, open=0)

        assert make_entry().has_comparison is False
        assert make_entry(all_pr_counts=counts).has_comparison is False
        assert make_entry(all_pr_counts=counts, all_merged_prs=[]).has_comparison is True
