"""Extract normalized rate limit readings from transport responses.

Every function here is total: missing or malformed quota metadata yields
None ("unavailable"), never an exception.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from .schemas import RateLimitInfo, RateLimitStatus, TransportKind


def _parse_int(value: Any) -> int | None:
    """Parse an integer header/field value, returning None if unparseable."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _lower_headers(headers: Any) -> dict[str, str]:
    """Normalize a headers object to a lowercase-keyed dict."""
    if headers is None:
        return {}
    items = headers.items() if hasattr(headers, "items") else headers
    try:
        return {str(key).lower(): value for key, value in items}
    except (TypeError, ValueError):
        return {}


def extract_rate_limit(headers: Mapping[str, str] | Any) -> RateLimitInfo | None:
    """Extract rate limit info from REST response headers.

    Reads x-ratelimit-limit, -remaining, -reset and -used. When the used
    header is absent it is derived as limit - remaining.

    Args:
        headers: Response headers (dict or httpx.Headers), any key case

    Returns:
        RateLimitInfo, or None when required headers are missing or malformed
    """
    header_dict = _lower_headers(headers)

    limit = _parse_int(header_dict.get("x-ratelimit-limit"))
    remaining = _parse_int(header_dict.get("x-ratelimit-remaining"))
    reset = _parse_int(header_dict.get("x-ratelimit-reset"))
    if limit is None or remaining is None or reset is None:
        return None

    if "x-ratelimit-used" in header_dict:
        used = _parse_int(header_dict["x-ratelimit-used"])
        if used is None:
            return None
    else:
        used = limit - remaining

    try:
        return RateLimitInfo(
            limit=limit,
            remaining=remaining,
            reset=reset,
            used=used,
            transport=TransportKind.REST,
        )
    except ValidationError:
        return None


def _parse_reset_at(value: Any) -> int | None:
    """Convert an ISO-8601 resetAt timestamp to epoch seconds."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp())
    except ValueError:
        return None


def rate_limit_from_graphql(payload: Mapping[str, Any] | None) -> RateLimitInfo | None:
    """Extract rate limit info from a GraphQL `rateLimit` selection.

    Args:
        payload: Dict with limit, remaining, resetAt, cost, used

    Returns:
        RateLimitInfo, or None when required fields are missing or malformed
    """
    if not isinstance(payload, Mapping):
        return None

    limit = _parse_int(payload.get("limit"))
    remaining = _parse_int(payload.get("remaining"))
    reset = _parse_reset_at(payload.get("resetAt"))
    if limit is None or remaining is None or reset is None:
        return None

    if payload.get("used") is not None:
        used = _parse_int(payload["used"])
        if used is None:
            return None
    else:
        used = limit - remaining

    try:
        return RateLimitInfo(
            limit=limit,
            remaining=remaining,
            reset=reset,
            used=used,
            transport=TransportKind.GRAPHQL,
        )
    except ValidationError:
        return None


def format_countdown(reset: int, now: float | None = None) -> str:
    """Format the time until reset as M:SS, clamped at 0:00.

    Args:
        reset: Epoch seconds when the window resets
        now: Current epoch seconds (defaults to time.time())

    Returns:
        Countdown string such as "4:05"
    """
    current = time.time() if now is None else now
    diff = max(0, int(reset - current))
    minutes, seconds = divmod(diff, 60)
    return f"{minutes}:{seconds:02d}"


def rate_limit_status(info: RateLimitInfo | None) -> RateLimitStatus | None:
    """Health status of a reading: good above 50% remaining, warning above 20%."""
    if info is None:
        return None
    return info.status
