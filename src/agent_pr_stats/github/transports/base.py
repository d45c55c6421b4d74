"""Transport contract and the shared pagination loop.

Both transports return the same SearchPage shape, so the pagination rules
(page ceiling, truncation, incomplete results, progress) live here once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from agent_pr_stats.logging import get_logger
from agent_pr_stats.schemas import AllPRCounts, PullRequest

from ..cancellation import CancellationToken
from ..exceptions import IncompleteResultsError, TruncatedResultsError
from ..progress import NullProgress, ProgressReporter
from ..rate_limit import RateLimitInfo, TransportKind

logger = get_logger(__name__)


@dataclass(frozen=True)
class SearchPage:
    """One page of search results from either transport.

    `cursor` is opaque to callers: a page number for REST, an end cursor
    for GraphQL. It is only meaningful when `has_more` is True.
    """

    records: list[PullRequest]
    rate_limit: RateLimitInfo | None
    has_more: bool
    cursor: str | None
    total_count: int
    incomplete: bool = False


@dataclass(frozen=True)
class CombinedPage:
    """First GraphQL page with the comparison statistics fetched alongside it."""

    page: SearchPage
    counts: AllPRCounts
    merged_sample: list[PullRequest] = field(default_factory=list)


@dataclass(frozen=True)
class SearchCount:
    """Result of a count-only query."""

    total_count: int
    rate_limit: RateLimitInfo | None


@dataclass
class CollectedResults:
    """Everything gathered by collect_all_pages."""

    records: list[PullRequest]
    rate_limit: RateLimitInfo | None
    total_count: int
    pages: int


class PRSearchTransport(Protocol):
    """A way of paging through GitHub issue search results."""

    kind: TransportKind

    async def fetch_page(
        self,
        query: str,
        cursor: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> SearchPage: ...


def select_transport(token: str | None) -> TransportKind:
    """GraphQL whenever a token is present, REST otherwise."""
    return TransportKind.GRAPHQL if token else TransportKind.REST


async def collect_all_pages(
    transport: PRSearchTransport,
    query: str,
    *,
    max_pages: int = 10,
    result_ceiling: int = 1000,
    cancel_token: CancellationToken | None = None,
    progress: ProgressReporter | None = None,
    first_page: SearchPage | None = None,
    label: str = "agent PRs",
) -> CollectedResults:
    """Fetch every page of a search, up to the result ceiling.

    Stops when a page is empty, when the transport reports no more pages, or
    when the running total reaches the reported total count. Reaching the
    page limit with results still unfetched raises instead of returning a
    partial set.

    Args:
        transport: Transport to page through
        query: Search query string
        max_pages: Maximum number of pages to request
        result_ceiling: Hard result ceiling of the search API
        cancel_token: Token that aborts in-flight page requests
        progress: Receives "Fetched X of Y" after every page
        first_page: Already-fetched first page (GraphQL combined query)
        label: Noun used in progress messages

    Returns:
        CollectedResults with all records and the latest rate limit reading

    Raises:
        TruncatedResultsError: If more results exist than can be fetched
        IncompleteResultsError: If any page was flagged incomplete
    """
    reporter = progress or NullProgress()
    records: list[PullRequest] = []
    rate_limit: RateLimitInfo | None = None
    total_count = 0
    incomplete = False
    cursor: str | None = None
    page_number = 0

    while True:
        page_number += 1
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        if page_number == 1 and first_page is not None:
            page = first_page
        else:
            page = await transport.fetch_page(query, cursor, cancel_token)

        if page_number == 1:
            total_count = page.total_count
        rate_limit = page.rate_limit or rate_limit
        incomplete = incomplete or page.incomplete

        if not page.records:
            break

        records.extend(page.records)
        reporter.update_progress(
            len(records),
            total_count,
            f"Fetched {len(records)} of {total_count} {label}",
        )

        if not page.has_more or len(records) >= page.total_count:
            break

        if page_number >= max_pages:
            if len(records) < total_count:
                raise TruncatedResultsError(total_count, min(len(records), result_ceiling))
            break

        cursor = page.cursor

    if incomplete:
        raise IncompleteResultsError()

    logger.debug(
        "Collected {} of {} results in {} page(s) via {}",
        len(records),
        total_count,
        page_number,
        transport.kind,
    )
    return CollectedResults(
        records=records,
        rate_limit=rate_limit,
        total_count=total_count,
        pages=page_number,
    )
