"""GitHub API access module.

This module provides:
- Transports: RestSearchTransport, GraphQLTransport, collect_all_pages
- Rate limit extraction: RateLimitInfo, extract_rate_limit, etc.
- Cancellation: CancellationToken
- Progress reporting: ProgressReporter and ready-made reporters
- Exceptions: GitHubClientError and subclasses
"""

from .cancellation import CancellationToken, run_cancellable
from .errors import error_from_request_failed, error_from_status, error_from_transport_failure
from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubGraphQLError,
    GitHubMalformedResponseError,
    GitHubNotFoundError,
    GitHubQueryRejectedError,
    GitHubRateLimitError,
    IncompleteResultsError,
    RequestCancelledError,
    RequestSupersededError,
    TruncatedResultsError,
)
from .progress import (
    CallbackProgress,
    LoggingProgress,
    NullProgress,
    ProgressKind,
    ProgressReporter,
    ProgressUpdate,
)
from .rate_limit import (
    RateLimitInfo,
    RateLimitStatus,
    TransportKind,
    extract_rate_limit,
    format_countdown,
    rate_limit_from_graphql,
)
from .transports import (
    ComparisonQueries,
    GraphQLTransport,
    PRSearchTransport,
    RestSearchTransport,
    SearchPage,
    collect_all_pages,
    select_transport,
)

__all__ = [
    # Cancellation
    "CancellationToken",
    "run_cancellable",
    # Errors
    "error_from_request_failed",
    "error_from_status",
    "error_from_transport_failure",
    # Exceptions
    "GitHubAuthenticationError",
    "GitHubClientError",
    "GitHubForbiddenError",
    "GitHubGraphQLError",
    "GitHubMalformedResponseError",
    "GitHubNotFoundError",
    "GitHubQueryRejectedError",
    "GitHubRateLimitError",
    "IncompleteResultsError",
    "RequestCancelledError",
    "RequestSupersededError",
    "TruncatedResultsError",
    # Progress
    "CallbackProgress",
    "LoggingProgress",
    "NullProgress",
    "ProgressKind",
    "ProgressReporter",
    "ProgressUpdate",
    # Rate limits
    "RateLimitInfo",
    "RateLimitStatus",
    "TransportKind",
    "extract_rate_limit",
    "format_countdown",
    "rate_limit_from_graphql",
    # Transports
    "ComparisonQueries",
    "GraphQLTransport",
    "PRSearchTransport",
    "RestSearchTransport",
    "SearchPage",
    "collect_all_pages",
    "select_transport",
]
