"""Search query strings for both transports.

Search queries use GitHub's issue search syntax and are shared by the REST
and GraphQL transports. The GraphQL documents select the same PR fields the
REST search returns, so both convert to the same canonical record.
"""

from __future__ import annotations

from dataclasses import dataclass

from agent_pr_stats.schemas import FetchRequest

DEFAULT_AGENT_AUTHOR = "app/copilot-swe-agent"


def build_base_query(request: FetchRequest) -> str:
    """All PRs in the repository created within the range."""
    return f"repo:{request.full_name} is:pr {request.date_qualifier}"


def build_search_query(request: FetchRequest, agent_author: str = DEFAULT_AGENT_AUTHOR) -> str:
    """PRs authored by the coding agent within the range.

    Args:
        request: Normalized fetch request
        agent_author: Search author qualifier identifying the agent

    Returns:
        Query such as "repo:o/r is:pr author:app/copilot-swe-agent created:a..b"
    """
    return f"repo:{request.full_name} is:pr author:{agent_author} {request.date_qualifier}"


def build_merged_query(request: FetchRequest) -> str:
    """Merged PRs (all authors) within the range."""
    return f"{build_base_query(request)} is:merged"


def build_open_query(request: FetchRequest) -> str:
    """Open PRs (all authors) within the range."""
    return f"{build_base_query(request)} is:open"


@dataclass(frozen=True)
class ComparisonQueries:
    """Repository-wide queries used for comparison statistics.

    `closed` is never queried; it is derived from the other three counts.
    """

    total: str
    merged: str
    open: str

    @classmethod
    def for_request(cls, request: FetchRequest) -> ComparisonQueries:
        """Build the comparison queries for a request."""
        return cls(
            total=build_base_query(request),
            merged=build_merged_query(request),
            open=build_open_query(request),
        )


# -----------------------------------------------------------------------------
# GraphQL documents
# -----------------------------------------------------------------------------

PR_FIELDS_FRAGMENT = """
fragment PRFields on PullRequest {
    databaseId
    number
    title
    state
    createdAt
    mergedAt
    url
    author { login }
}
"""

# First page of an acquisition: the agent PR page plus every comparison
# statistic in one round trip. `allMergedPRs` is a fixed sample and is not
# paginated.
GRAPHQL_COMBINED_QUERY = (
    """
query AgentPRDashboard(
    $agentQuery: String!,
    $mergedAllQuery: String!,
    $totalQuery: String!,
    $mergedQuery: String!,
    $openQuery: String!,
    $first: Int!,
    $sampleSize: Int!,
    $after: String
) {
    agentPRs: search(query: $agentQuery, type: ISSUE, first: $first, after: $after) {
        issueCount
        pageInfo { hasNextPage endCursor }
        nodes { ...PRFields }
    }
    allMergedPRs: search(query: $mergedAllQuery, type: ISSUE, first: $sampleSize) {
        issueCount
        pageInfo { hasNextPage endCursor }
        nodes { ...PRFields }
    }
    totalCount: search(query: $totalQuery, type: ISSUE, first: 1) { issueCount }
    mergedCount: search(query: $mergedQuery, type: ISSUE, first: 1) { issueCount }
    openCount: search(query: $openQuery, type: ISSUE, first: 1) { issueCount }
    rateLimit { limit remaining resetAt cost used }
}
"""
    + PR_FIELDS_FRAGMENT
)

# Later pages and single-purpose fetches.
GRAPHQL_SEARCH_QUERY = (
    """
query SearchQuery($query: String!, $first: Int!, $after: String) {
    search(query: $query, type: ISSUE, first: $first, after: $after) {
        issueCount
        pageInfo { hasNextPage endCursor }
        nodes { ...PRFields }
    }
    rateLimit { limit remaining resetAt cost used }
}
"""
    + PR_FIELDS_FRAGMENT
)
