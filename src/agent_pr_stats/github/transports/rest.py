"""REST Search API transport.

Used when no token is available. Pages are numbered, quota metadata comes
from the x-ratelimit-* response headers.
"""

from __future__ import annotations

from typing import Any

from githubkit import GitHub
from githubkit.exception import GitHubException, RequestFailed
from pydantic import ValidationError

from agent_pr_stats.logging import get_logger
from agent_pr_stats.schemas import SearchResponse, prs_from_search_items

from ..cancellation import CancellationToken, run_cancellable
from ..errors import error_from_request_failed, error_from_transport_failure
from ..exceptions import GitHubMalformedResponseError
from ..rate_limit import RateLimitInfo, TransportKind, extract_rate_limit
from .base import SearchCount, SearchPage

logger = get_logger(__name__)


class RestSearchTransport:
    """Page through GET /search/issues with githubkit.

    Usage:
        transport = RestSearchTransport(GitHub())
        page = await transport.fetch_page("repo:o/r is:pr created:2026-01-01..2026-01-31")
    """

    kind = TransportKind.REST

    def __init__(self, github: GitHub[Any], *, page_size: int = 100) -> None:
        """Initialize the transport.

        Args:
            github: githubkit client (anonymous or authenticated)
            page_size: Results per page (max 100)
        """
        self._github = github
        self._page_size = page_size

    async def _search(
        self,
        query: str,
        *,
        per_page: int,
        page: int,
        cancel_token: CancellationToken | None,
    ) -> tuple[SearchResponse, RateLimitInfo | None]:
        try:
            resp = await run_cancellable(
                self._github.rest.search.async_issues_and_pull_requests(
                    q=query,
                    sort="created",
                    order="desc",
                    per_page=per_page,
                    page=page,
                ),
                cancel_token,
            )
        except RequestFailed as e:
            raise error_from_request_failed(e) from e
        except GitHubException as e:
            raise error_from_transport_failure(e) from e

        rate_limit = extract_rate_limit(resp.headers)
        try:
            body = SearchResponse.model_validate(resp.json())
        except ValidationError as e:
            raise GitHubMalformedResponseError(f"Unexpected search response: {e}") from e
        return body, rate_limit

    async def fetch_page(
        self,
        query: str,
        cursor: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> SearchPage:
        """Fetch one page of search results.

        Args:
            query: Search query string
            cursor: Page number as a string (None for the first page)
            cancel_token: Token that aborts the request

        Returns:
            SearchPage; `has_more` is False once a short page is returned
        """
        page = int(cursor) if cursor else 1
        body, rate_limit = await self._search(
            query, per_page=self._page_size, page=page, cancel_token=cancel_token
        )
        logger.debug(
            "Search page {}: {} item(s), total_count={}", page, len(body.items), body.total_count
        )
        return SearchPage(
            records=prs_from_search_items(body.items),
            rate_limit=rate_limit,
            has_more=len(body.items) >= self._page_size,
            cursor=str(page + 1),
            total_count=body.total_count,
            incomplete=body.incomplete_results,
        )

    async def first_page(
        self, query: str, cancel_token: CancellationToken | None = None
    ) -> SearchPage:
        """Fetch only the first page (the merged comparison sample)."""
        return await self.fetch_page(query, None, cancel_token)

    async def count(self, query: str, cancel_token: CancellationToken | None = None) -> SearchCount:
        """Fetch only the total_count of a query (one item per page).

        Args:
            query: Search query string
            cancel_token: Token that aborts the request

        Returns:
            SearchCount with the total and the quota reading
        """
        body, rate_limit = await self._search(
            query, per_page=1, page=1, cancel_token=cancel_token
        )
        return SearchCount(total_count=body.total_count, rate_limit=rate_limit)
