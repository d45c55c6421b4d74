"""Cache key construction.

Keys embed the schema version and whether the request was authenticated,
so data fetched with a token is never served to an anonymous caller.
"""

import json

from agent_pr_stats.schemas import FetchRequest

DEFAULT_KEY_PREFIX = "agent_pr_cache_"
DEFAULT_CACHE_VERSION = "v3"


def version_prefix(prefix: str = DEFAULT_KEY_PREFIX, version: str = DEFAULT_CACHE_VERSION) -> str:
    """Prefix shared by every key of the given version."""
    return f"{prefix}{version}_"


def build_cache_key(
    request: FetchRequest,
    authenticated: bool,
    *,
    prefix: str = DEFAULT_KEY_PREFIX,
    version: str = DEFAULT_CACHE_VERSION,
) -> str:
    """Compute the cache key for a request.

    Args:
        request: Normalized fetch request
        authenticated: Whether the request carries a token
        prefix: Key prefix
        version: Cache schema version

    Returns:
        Key such as 'agent_pr_cache_v3_{"owner":...}_auth'
    """
    params = json.dumps(
        {
            "owner": request.owner,
            "repo": request.repo,
            "fromDate": request.from_date.isoformat(),
            "toDate": request.to_date.isoformat(),
        },
        separators=(",", ":"),
    )
    suffix = "_auth" if authenticated else "_noauth"
    return f"{version_prefix(prefix, version)}{params}{suffix}"
