"""Acquisition orchestrator.

Coordinates the cache, transport selection, pagination and comparison
statistics for one request at a time:

    cache lookup -> (miss) transport -> rate limit -> cache write-back

A newer fetch_prs call supersedes the previous one: the previous request's
cancellation token is cancelled, which aborts its in-flight network calls,
and its result is never returned.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from githubkit import GitHub

from agent_pr_stats.cache import CacheStore, DatabaseKeyValueStore
from agent_pr_stats.config import Settings, get_settings
from agent_pr_stats.github import (
    CancellationToken,
    ComparisonQueries,
    GraphQLTransport,
    NullProgress,
    ProgressReporter,
    RateLimitInfo,
    RequestCancelledError,
    RequestSupersededError,
    RestSearchTransport,
    TransportKind,
    collect_all_pages,
    select_transport,
)
from agent_pr_stats.github.transports import SearchCount, SearchPage, build_search_query
from agent_pr_stats.logging import bind_repo, bind_request, get_logger
from agent_pr_stats.schemas import AllPRCounts, FetchRequest, PullRequest

logger = get_logger(__name__)

GitHubFactory = Callable[[str | None], GitHub[Any]]

_COUNT_NAMES = ("total", "merged", "open")


def default_github_factory(token: str | None) -> GitHub[Any]:
    """Authenticated client when a token is given, anonymous otherwise.

    githubkit retries rate-limited and 5xx responses by default; every request
    here is sent exactly once.
    """
    if token:
        return GitHub(token, auto_retry=False)
    return GitHub(auto_retry=False)


@dataclass
class FetchResult:
    """Agent PRs for a request plus whatever comparison data came with them."""

    records: list[PullRequest]
    rate_limit_info: RateLimitInfo | None
    from_cache: bool
    all_pr_counts: AllPRCounts | None = None
    all_merged_prs: list[PullRequest] | None = None


@dataclass
class ComparisonResult:
    """Repository-wide statistics for comparing against the agent's PRs."""

    all_pr_counts: AllPRCounts
    all_merged_prs: list[PullRequest] = field(default_factory=list)
    rate_limit_info: RateLimitInfo | None = None


def _raise_if_cancelled(outcome: object) -> None:
    """Re-raise cancellation captured by a settled gather."""
    if isinstance(outcome, (RequestCancelledError, asyncio.CancelledError)):
        raise outcome


class AcquisitionOrchestrator:
    """Fetch agent-authored PRs with caching, transport routing and supersession.

    Usage:
        orchestrator = AcquisitionOrchestrator()
        result = await orchestrator.fetch_prs("octo-org", "octo-repo", "2026-01-01", "2026-01-31")
        comparison = await orchestrator.fetch_comparison_data(
            "octo-org", "octo-repo", "2026-01-01", "2026-01-31"
        )
    """

    def __init__(
        self,
        cache: CacheStore | None = None,
        github_factory: GitHubFactory = default_github_factory,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            cache: Cache store (defaults to the configured database cache)
            github_factory: Builds a githubkit client from an optional token
            settings: Settings (defaults to get_settings())
        """
        self._settings = settings or get_settings()
        self._cache = cache or CacheStore.from_settings(self._settings, DatabaseKeyValueStore())
        self._github_factory = github_factory
        self._request_id = 0
        self._current_token: CancellationToken | None = None

    @property
    def cache(self) -> CacheStore:
        """The cache store."""
        return self._cache

    @property
    def current_request_id(self) -> int:
        """Identifier of the most recent fetch_prs request."""
        return self._request_id

    @property
    def _cache_enabled(self) -> bool:
        return self._settings.cache.enabled

    def cancel(self) -> None:
        """Cancel the in-flight fetch_prs request, if any."""
        if self._current_token is not None:
            self._current_token.cancel("cancelled")

    def _begin_request(
        self, cancel_token: CancellationToken | None
    ) -> tuple[int, CancellationToken]:
        """Register a new request, cancelling the one it supersedes."""
        self._request_id += 1
        if self._current_token is not None:
            self._current_token.cancel("superseded")
        token = cancel_token or CancellationToken()
        self._current_token = token
        return self._request_id, token

    # -------------------------------------------------------------------------
    # fetch_prs
    # -------------------------------------------------------------------------

    async def fetch_prs(
        self,
        owner: str,
        repo: str,
        from_date: str | date,
        to_date: str | date,
        token: str | None = None,
        cancel_token: CancellationToken | None = None,
        progress: ProgressReporter | None = None,
    ) -> FetchResult:
        """Fetch every agent PR created in the range.

        Args:
            owner: Repository owner
            repo: Repository name
            from_date: First day of the range (YYYY-MM-DD or date)
            to_date: Last day of the range, inclusive
            token: GitHub token; selects GraphQL when present
            cancel_token: Token the caller can cancel (one is created if omitted)
            progress: Receives phase and page progress notifications

        Returns:
            FetchResult

        Raises:
            ValueError: If the repository name or date range is invalid
            GitHubClientError: On any upstream failure (never retried)
            RequestSupersededError: If a newer request replaced this one
            RequestCancelledError: If the request was cancelled
        """
        request = FetchRequest(
            owner=owner.strip(), repo=repo.strip(), from_date=from_date, to_date=to_date
        )
        request_id, cancel = self._begin_request(cancel_token)
        reporter = progress or NullProgress()

        try:
            result = await self._fetch_prs(request, token, cancel, reporter)
        except RequestCancelledError:
            if request_id != self._request_id:
                raise RequestSupersededError(request_id, self._request_id) from None
            raise
        finally:
            if self._current_token is cancel and request_id == self._request_id:
                self._current_token = None

        if request_id != self._request_id:
            raise RequestSupersededError(request_id, self._request_id)
        return result

    async def _fetch_prs(
        self,
        request: FetchRequest,
        token: str | None,
        cancel: CancellationToken,
        reporter: ProgressReporter,
    ) -> FetchResult:
        log = bind_request(
            request.owner,
            request.repo,
            request.from_date.isoformat(),
            request.to_date.isoformat(),
        )

        key = self._cache.key_for(request, authenticated=bool(token))
        if self._cache_enabled:
            await self._cache.sweep_expired()
            cached = await self._cache.get(key)
            if cached is not None:
                reporter.update_phase(
                    "Loading from cache...", "Using cached data from previous request"
                )
                log.info("Serving {} agent PR(s) from cache", len(cached.data))
                return FetchResult(
                    records=cached.data,
                    rate_limit_info=cached.rate_limit_info,
                    from_cache=True,
                    all_pr_counts=cached.all_pr_counts,
                    all_merged_prs=cached.all_merged_prs,
                )

        github = self._github_factory(token)
        kind = select_transport(token)
        log.info("Fetching agent PRs via {}", kind)
        if kind == TransportKind.GRAPHQL:
            result = await self._fetch_with_graphql(github, request, cancel, reporter)
        else:
            result = await self._fetch_with_rest(github, request, cancel, reporter)

        if self._cache_enabled:
            await self._cache.put(
                key,
                result.records,
                result.rate_limit_info,
                result.all_pr_counts,
                result.all_merged_prs,
            )
        log.info("Fetched {} agent PR(s)", len(result.records))
        return result

    async def _fetch_with_graphql(
        self,
        github: GitHub[Any],
        request: FetchRequest,
        cancel: CancellationToken,
        reporter: ProgressReporter,
    ) -> FetchResult:
        search = self._settings.search
        transport = GraphQLTransport(
            github, page_size=search.page_size, sample_size=search.comparison_sample_size
        )
        query = build_search_query(request, search.agent_author)

        reporter.update_phase(
            "Fetching via GraphQL API...",
            "Combined query for agent PRs, repository statistics, and merged PRs",
        )
        combined = await transport.fetch_combined(
            query, ComparisonQueries.for_request(request), cancel
        )
        collected = await collect_all_pages(
            transport,
            query,
            max_pages=search.max_pages,
            result_ceiling=search.result_ceiling,
            cancel_token=cancel,
            progress=reporter,
            first_page=combined.page,
        )
        return FetchResult(
            records=collected.records,
            rate_limit_info=collected.rate_limit,
            from_cache=False,
            all_pr_counts=combined.counts,
            all_merged_prs=combined.merged_sample,
        )

    async def _fetch_with_rest(
        self,
        github: GitHub[Any],
        request: FetchRequest,
        cancel: CancellationToken,
        reporter: ProgressReporter,
    ) -> FetchResult:
        search = self._settings.search
        transport = RestSearchTransport(github, page_size=search.page_size)
        query = build_search_query(request, search.agent_author)

        reporter.update_phase(
            "Fetching agent PRs...", "Searching for PRs created by the coding agent"
        )
        collected = await collect_all_pages(
            transport,
            query,
            max_pages=search.max_pages,
            result_ceiling=search.result_ceiling,
            cancel_token=cancel,
            progress=reporter,
        )

        reporter.update_phase(
            "Fetching comparison data...", "Loading repository statistics and merged PRs"
        )
        comparison = await self._rest_comparison(github, request, cancel)
        return FetchResult(
            records=collected.records,
            rate_limit_info=comparison.rate_limit_info or collected.rate_limit,
            from_cache=False,
            all_pr_counts=comparison.all_pr_counts,
            all_merged_prs=comparison.all_merged_prs,
        )

    async def _rest_comparison(
        self,
        github: GitHub[Any],
        request: FetchRequest,
        cancel: CancellationToken | None,
    ) -> ComparisonResult:
        """Fan out the three count queries and the merged sample concurrently.

        Every call settles before results are read. A failed count degrades
        to zero; `closed` is derived only when all three counts succeeded.
        A failed merged sample degrades to an empty list.
        """
        transport = RestSearchTransport(
            github, page_size=self._settings.search.comparison_sample_size
        )
        queries = ComparisonQueries.for_request(request)

        outcomes = await asyncio.gather(
            transport.count(queries.total, cancel),
            transport.count(queries.merged, cancel),
            transport.count(queries.open, cancel),
            transport.first_page(queries.merged, cancel),
            return_exceptions=True,
        )
        for outcome in outcomes:
            _raise_if_cancelled(outcome)

        values: dict[str, int] = {}
        rate_limit: RateLimitInfo | None = None
        for name, outcome in zip(_COUNT_NAMES, outcomes[:3], strict=True):
            if isinstance(outcome, SearchCount):
                values[name] = outcome.total_count
                rate_limit = outcome.rate_limit or rate_limit
            else:
                logger.warning("Failed to fetch {} PR count: {}", name, outcome)

        if len(values) == len(_COUNT_NAMES):
            counts = AllPRCounts.derive(**values)
        else:
            counts = AllPRCounts(**values)

        sample = outcomes[3]
        merged_records: list[PullRequest] = []
        if isinstance(sample, SearchPage):
            merged_records = sample.records
            rate_limit = sample.rate_limit or rate_limit
        else:
            logger.warning("Failed to fetch merged PR sample: {}", sample)

        return ComparisonResult(
            all_pr_counts=counts, all_merged_prs=merged_records, rate_limit_info=rate_limit
        )

    # -------------------------------------------------------------------------
    # fetch_comparison_data
    # -------------------------------------------------------------------------

    async def fetch_comparison_data(
        self,
        owner: str,
        repo: str,
        from_date: str | date,
        to_date: str | date,
        token: str | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> ComparisonResult:
        """Fetch repository-wide comparison statistics on demand.

        Served from cache when both aggregates are cached. With a token and
        cached counts only the merged sample is fetched (one request); with a
        token and no counts the combined query fetches both (one request);
        without a token the REST fan-out is used. The result is attached to
        the cached entry for the same request.

        Args:
            owner: Repository owner
            repo: Repository name
            from_date: First day of the range
            to_date: Last day of the range, inclusive
            token: GitHub token; selects GraphQL when present
            cancel_token: Token that aborts in-flight requests

        Returns:
            ComparisonResult
        """
        request = FetchRequest(
            owner=owner.strip(), repo=repo.strip(), from_date=from_date, to_date=to_date
        )
        log = bind_repo(request.owner, request.repo)
        key = self._cache.key_for(request, authenticated=bool(token))

        cached = await self._cache.get(key) if self._cache_enabled else None
        if (
            cached is not None
            and cached.all_pr_counts is not None
            and cached.all_merged_prs is not None
        ):
            log.debug("Comparison data served from cache")
            return ComparisonResult(
                all_pr_counts=cached.all_pr_counts,
                all_merged_prs=cached.all_merged_prs,
                rate_limit_info=cached.rate_limit_info,
            )

        github = self._github_factory(token)
        if select_transport(token) == TransportKind.GRAPHQL:
            cached_counts = cached.all_pr_counts if cached is not None else None
            result = await self._graphql_comparison(github, request, cached_counts, cancel_token)
        else:
            result = await self._rest_comparison(github, request, cancel_token)

        if self._cache_enabled:
            await self._cache.update_aggregates(
                key, result.all_pr_counts, result.all_merged_prs, result.rate_limit_info
            )
        log.info(
            "Comparison data: {} PR(s), {} merged sample(s)",
            result.all_pr_counts.total,
            len(result.all_merged_prs),
        )
        return result

    async def _graphql_comparison(
        self,
        github: GitHub[Any],
        request: FetchRequest,
        cached_counts: AllPRCounts | None,
        cancel: CancellationToken | None,
    ) -> ComparisonResult:
        sample_size = self._settings.search.comparison_sample_size
        transport = GraphQLTransport(github, page_size=sample_size, sample_size=sample_size)
        queries = ComparisonQueries.for_request(request)

        if cached_counts is not None:
            page = await transport.fetch_page(queries.merged, None, cancel)
            return ComparisonResult(
                all_pr_counts=cached_counts,
                all_merged_prs=page.records,
                rate_limit_info=page.rate_limit,
            )

        combined = await transport.fetch_combined(queries.merged, queries, cancel)
        return ComparisonResult(
            all_pr_counts=combined.counts,
            all_merged_prs=combined.merged_sample,
            rate_limit_info=combined.page.rate_limit,
        )
