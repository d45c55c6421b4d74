"""GraphQL API transport.

Used whenever a token is available. The first page of an acquisition is a
combined query that also returns the repository-wide counts and a sample of
merged PRs, so comparison statistics cost no extra request.
"""

from __future__ import annotations

from typing import Any

from githubkit import GitHub
from githubkit.exception import GitHubException, GraphQLFailed, RequestFailed
from pydantic import ValidationError

from agent_pr_stats.logging import get_logger
from agent_pr_stats.schemas import (
    AllPRCounts,
    CombinedQueryData,
    GraphQLSearchResult,
    SingleSearchQueryData,
    prs_from_graphql_nodes,
)

from ..cancellation import CancellationToken, run_cancellable
from ..errors import error_from_request_failed, error_from_transport_failure
from ..exceptions import GitHubGraphQLError, GitHubMalformedResponseError
from ..rate_limit import RateLimitInfo, TransportKind, rate_limit_from_graphql
from .base import CombinedPage, SearchPage
from .queries import GRAPHQL_COMBINED_QUERY, GRAPHQL_SEARCH_QUERY, ComparisonQueries

logger = get_logger(__name__)


def _graphql_error_message(error: GraphQLFailed) -> str:
    errors = getattr(error.response, "errors", None) or []
    messages = [getattr(item, "message", str(item)) for item in errors]
    return "; ".join(messages) or "unknown error"


def _to_page(result: GraphQLSearchResult, rate_limit: RateLimitInfo | None) -> SearchPage:
    return SearchPage(
        records=prs_from_graphql_nodes(result.nodes),
        rate_limit=rate_limit,
        has_more=result.page_info.has_next_page,
        cursor=result.page_info.end_cursor,
        total_count=result.issue_count,
    )


class GraphQLTransport:
    """Page through GitHub search via the GraphQL API.

    Usage:
        transport = GraphQLTransport(GitHub(token))
        combined = await transport.fetch_combined(agent_query, ComparisonQueries.for_request(req))
        page = await transport.fetch_page(agent_query, combined.page.cursor)
    """

    kind = TransportKind.GRAPHQL

    def __init__(
        self,
        github: GitHub[Any],
        *,
        page_size: int = 100,
        sample_size: int = 100,
    ) -> None:
        """Initialize the transport.

        Args:
            github: Authenticated githubkit client
            page_size: Nodes per page (max 100)
            sample_size: Merged PRs returned by the combined query
        """
        self._github = github
        self._page_size = page_size
        self._sample_size = sample_size

    async def _execute(
        self,
        query: str,
        variables: dict[str, Any],
        cancel_token: CancellationToken | None,
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its `data`.

        Raises:
            GitHubGraphQLError: If the response carries errors or no data
            GitHubClientError: If the HTTP request itself failed
        """
        try:
            data = await run_cancellable(self._github.async_graphql(query, variables), cancel_token)
        except GraphQLFailed as e:
            raise GitHubGraphQLError(f"GraphQL error: {_graphql_error_message(e)}") from e
        except RequestFailed as e:
            raise error_from_request_failed(e) from e
        except GitHubException as e:
            raise error_from_transport_failure(e) from e

        if not data:
            raise GitHubGraphQLError("GraphQL response contained no data")
        return data

    async def fetch_page(
        self,
        query: str,
        cursor: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> SearchPage:
        """Fetch one page with the single search query.

        Args:
            query: Search query string
            cursor: End cursor of the previous page (None for the first page)
            cancel_token: Token that aborts the request

        Returns:
            SearchPage with the GraphQL point budget as rate limit
        """
        data = await self._execute(
            GRAPHQL_SEARCH_QUERY,
            {"query": query, "first": self._page_size, "after": cursor},
            cancel_token,
        )
        try:
            parsed = SingleSearchQueryData.model_validate(data)
        except ValidationError as e:
            raise GitHubMalformedResponseError(f"Unexpected GraphQL search response: {e}") from e

        return _to_page(parsed.search, rate_limit_from_graphql(parsed.rate_limit))

    async def fetch_combined(
        self,
        query: str,
        comparison: ComparisonQueries,
        cancel_token: CancellationToken | None = None,
    ) -> CombinedPage:
        """Fetch the first page together with the comparison statistics.

        Args:
            query: Search query for the paged result set
            comparison: Repository-wide total/merged/open queries
            cancel_token: Token that aborts the request

        Returns:
            CombinedPage with the first page, derived counts and merged sample
        """
        data = await self._execute(
            GRAPHQL_COMBINED_QUERY,
            {
                "agentQuery": query,
                "mergedAllQuery": comparison.merged,
                "totalQuery": comparison.total,
                "mergedQuery": comparison.merged,
                "openQuery": comparison.open,
                "first": self._page_size,
                "sampleSize": self._sample_size,
                "after": None,
            },
            cancel_token,
        )
        try:
            parsed = CombinedQueryData.model_validate(data)
        except ValidationError as e:
            raise GitHubMalformedResponseError(f"Unexpected GraphQL combined response: {e}") from e

        counts = AllPRCounts.derive(
            total=parsed.total_count.issue_count,
            merged=parsed.merged_count.issue_count,
            open=parsed.open_count.issue_count,
        )
        logger.debug(
            "Combined query: {} agent PR(s), counts total={} merged={} open={}",
            parsed.agent_prs.issue_count,
            counts.total,
            counts.merged,
            counts.open,
        )
        return CombinedPage(
            page=_to_page(parsed.agent_prs, rate_limit_from_graphql(parsed.rate_limit)),
            counts=counts,
            merged_sample=prs_from_graphql_nodes(parsed.all_merged_prs.nodes),
        )
