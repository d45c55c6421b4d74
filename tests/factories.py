"""Factory functions for creating test data.

This module provides factory functions for:
- Canonical records (PullRequest, RateLimitInfo, AllPRCounts)
- GitHub wire payloads (REST search items, GraphQL nodes and envelopes)
- Mocked githubkit responses

Design principles:
- Factories provide sensible defaults that can be overridden
- Wire factories return dicts shaped exactly like GitHub's JSON
"""

from datetime import datetime, timedelta
from typing import Any
from unittest.mock import MagicMock

from agent_pr_stats.github import RateLimitInfo, TransportKind
from agent_pr_stats.schemas import PRAuthor, PRState, PullRequest

# Import test timeline constants
from tests.conftest import JAN_05, JAN_05_ISO, RESET_EPOCH, RESET_ISO

REPO_URL = "https://github.com/octo-org/octo-repo"


# -----------------------------------------------------------------------------
# Canonical Record Factories
# -----------------------------------------------------------------------------
def make_pr(
    number: int = 1,
    *,
    state: PRState | str = PRState.OPEN,
    created_at: datetime = JAN_05,
    merged_at: datetime | None = None,
    title: str | None = None,
    login: str | None = "Copilot",
) -> PullRequest:
    """Create a canonical PullRequest.

    Args:
        number: PR number (also used to derive the id)
        state: Raw state ("open" or "closed")
        created_at: When the PR was opened
        merged_at: When the PR was merged (implies merged status)
        title: PR title (defaults to "PR #{number}")
        login: Author login

    Returns:
        PullRequest instance
    """
    return PullRequest(
        id=1_000_000 + number,
        number=number,
        title=title if title is not None else f"PR #{number}",
        state=PRState(state),
        created_at=created_at,
        merged_at=merged_at,
        author=PRAuthor(login=login),
        url=f"{REPO_URL}/pull/{number}",
    )


def make_merged_pr(
    number: int = 1,
    *,
    created_at: datetime = JAN_05,
    hours_to_merge: float = 2.0,
    **overrides: Any,
) -> PullRequest:
    """Create a merged PullRequest merged `hours_to_merge` after opening."""
    return make_pr(
        number,
        state=PRState.CLOSED,
        created_at=created_at,
        merged_at=created_at + timedelta(hours=hours_to_merge),
        **overrides,
    )


def make_closed_pr(number: int = 1, **overrides: Any) -> PullRequest:
    """Create a PullRequest closed without merge."""
    return make_pr(number, state=PRState.CLOSED, **overrides)


def make_rate_limit(
    *,
    transport: TransportKind = TransportKind.REST,
    limit: int | None = None,
    remaining: int | None = None,
    reset: int = RESET_EPOCH,
    used: int | None = None,
) -> RateLimitInfo:
    """Create a RateLimitInfo with transport-appropriate defaults."""
    if limit is None:
        limit = 5000 if transport == TransportKind.GRAPHQL else 30
    if remaining is None:
        remaining = limit - 1
    return RateLimitInfo(
        limit=limit,
        remaining=remaining,
        reset=reset,
        used=used if used is not None else limit - remaining,
        transport=transport,
    )


# -----------------------------------------------------------------------------
# REST Search Payload Factories
# -----------------------------------------------------------------------------
def make_search_item(
    number: int = 1,
    *,
    state: str = "open",
    created_at: str = JAN_05_ISO,
    merged_at: str | None = None,
    title: str | None = None,
    login: str = "Copilot",
    **overrides: Any,
) -> dict[str, Any]:
    """Create a GET /search/issues item for a pull request.

    Returns:
        Dict suitable for SearchIssueItem.model_validate()
    """
    item: dict[str, Any] = {
        "id": 2_000_000 + number,
        "node_id": f"PR_kwDO{number}",
        "number": number,
        "title": title if title is not None else f"Agent PR #{number}",
        "state": state,
        "created_at": created_at,
        "updated_at": created_at,
        "closed_at": merged_at,
        "user": {"login": login, "id": 198982749, "type": "Bot"},
        "html_url": f"{REPO_URL}/pull/{number}",
        "pull_request": {
            "url": f"https://api.github.com/repos/octo-org/octo-repo/pulls/{number}",
            "html_url": f"{REPO_URL}/pull/{number}",
            "merged_at": merged_at,
        },
        "labels": [],
        "score": 1.0,
    }
    item.update(overrides)
    return item


def make_search_response(
    items: list[dict[str, Any]],
    *,
    total_count: int | None = None,
    incomplete_results: bool = False,
) -> dict[str, Any]:
    """Create a GET /search/issues response body."""
    return {
        "total_count": len(items) if total_count is None else total_count,
        "incomplete_results": incomplete_results,
        "items": items,
    }


def make_rest_headers(
    *,
    limit: int = 30,
    remaining: int = 29,
    reset: int = RESET_EPOCH,
    used: int | None = None,
) -> dict[str, str]:
    """Create x-ratelimit-* headers as GitHub sends them."""
    headers = {
        "X-RateLimit-Limit": str(limit),
        "X-RateLimit-Remaining": str(remaining),
        "X-RateLimit-Reset": str(reset),
        "X-RateLimit-Resource": "search",
    }
    if used is not None:
        headers["X-RateLimit-Used"] = str(used)
    return headers


def make_mock_response(
    body: Any,
    *,
    headers: dict[str, str] | None = None,
    status_code: int = 200,
) -> MagicMock:
    """Create a MagicMock that behaves like a githubkit Response."""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers if headers is not None else make_rest_headers()
    response.json.return_value = body
    return response


# -----------------------------------------------------------------------------
# GraphQL Payload Factories
# -----------------------------------------------------------------------------
def make_graphql_node(
    number: int = 1,
    *,
    state: str = "OPEN",
    created_at: str = JAN_05_ISO,
    merged_at: str | None = None,
    title: str | None = None,
    login: str | None = "Copilot",
) -> dict[str, Any]:
    """Create a PullRequest node as selected by the PRFields fragment."""
    return {
        "databaseId": 3_000_000 + number,
        "number": number,
        "title": title if title is not None else f"Agent PR #{number}",
        "state": state,
        "createdAt": created_at,
        "mergedAt": merged_at,
        "url": f"{REPO_URL}/pull/{number}",
        "author": {"login": login} if login is not None else None,
    }


def make_graphql_search(
    nodes: list[dict[str, Any]] | None = None,
    *,
    issue_count: int | None = None,
    has_next_page: bool = False,
    end_cursor: str | None = None,
) -> dict[str, Any]:
    """Create an aliased `search` selection result."""
    nodes = nodes or []
    return {
        "issueCount": len(nodes) if issue_count is None else issue_count,
        "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
        "nodes": nodes,
    }


def make_graphql_rate_limit(
    *,
    limit: int = 5000,
    remaining: int = 4990,
    reset_at: str = RESET_ISO,
    used: int | None = 10,
    cost: int = 1,
) -> dict[str, Any]:
    """Create a `rateLimit` selection result."""
    return {
        "limit": limit,
        "remaining": remaining,
        "resetAt": reset_at,
        "used": used,
        "cost": cost,
    }


def make_combined_data(
    *,
    agent_nodes: list[dict[str, Any]] | None = None,
    agent_count: int | None = None,
    has_next_page: bool = False,
    end_cursor: str | None = None,
    merged_nodes: list[dict[str, Any]] | None = None,
    total: int = 40,
    merged: int = 25,
    open: int = 10,
    rate_limit: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create the `data` of the combined first-page GraphQL query."""
    return {
        "agentPRs": make_graphql_search(
            agent_nodes,
            issue_count=agent_count,
            has_next_page=has_next_page,
            end_cursor=end_cursor,
        ),
        "allMergedPRs": make_graphql_search(merged_nodes, issue_count=merged),
        "totalCount": {"issueCount": total},
        "mergedCount": {"issueCount": merged},
        "openCount": {"issueCount": open},
        "rateLimit": rate_limit if rate_limit is not None else make_graphql_rate_limit(),
    }


def make_single_search_data(
    nodes: list[dict[str, Any]] | None = None,
    *,
    issue_count: int | None = None,
    has_next_page: bool = False,
    end_cursor: str | None = None,
    rate_limit: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create the `data` of the single search GraphQL query."""
    return {
        "search": make_graphql_search(
            nodes, issue_count=issue_count, has_next_page=has_next_page, end_cursor=end_cursor
        ),
        "rateLimit": rate_limit if rate_limit is not None else make_graphql_rate_limit(),
    }
