"""Rate limit extraction for GitHub API responses.

This module normalizes REST header quotas and GraphQL point budgets
into a single RateLimitInfo shape.
"""

from .extractor import (
    extract_rate_limit,
    format_countdown,
    rate_limit_from_graphql,
    rate_limit_status,
)
from .schemas import RateLimitInfo, RateLimitStatus, TransportKind

__all__ = [
    "RateLimitInfo",
    "RateLimitStatus",
    "TransportKind",
    "extract_rate_limit",
    "format_countdown",
    "rate_limit_from_graphql",
    "rate_limit_status",
]
