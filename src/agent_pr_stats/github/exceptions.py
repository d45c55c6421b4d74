"""GitHub client exceptions.

Every failure is terminal for the request that raised it: nothing here is
retried automatically, the caller decides whether to resubmit.
"""

from datetime import datetime


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class GitHubAuthenticationError(GitHubClientError):
    """Raised when authentication fails (401)."""

    pass


class GitHubNotFoundError(GitHubClientError):
    """Raised when the repository is absent or inaccessible (404)."""

    pass


class GitHubForbiddenError(GitHubClientError):
    """Raised on 403 when quota remains (permissions, SSO, abuse protection)."""

    pass


class GitHubRateLimitError(GitHubForbiddenError):
    """Raised on 403 when remaining quota is exactly zero.

    Callers should wait until `reset_at` before resubmitting.
    """

    def __init__(self, message: str, reset_at: datetime | None = None) -> None:
        super().__init__(message)
        self.reset_at = reset_at


class GitHubQueryRejectedError(GitHubClientError):
    """Raised when the search query fails validation (422)."""

    pass


class GitHubGraphQLError(GitHubClientError):
    """Raised when a GraphQL response carries errors or no data."""

    pass


class GitHubMalformedResponseError(GitHubClientError):
    """Raised when a response body does not match the expected schema."""

    pass


class TruncatedResultsError(GitHubClientError):
    """Raised when the true result count exceeds the search ceiling.

    A partial result set would silently misreport counts and rates, so it is
    never returned.
    """

    def __init__(self, total_count: int, ceiling: int) -> None:
        super().__init__(
            f"Results truncated: Found {total_count} PRs, but only the first {ceiling} "
            "could be fetched due to GitHub Search API limitations. The retrieved "
            "results cannot be displayed because the result set is incomplete. "
            "Please narrow your date range to see complete results."
        )
        self.total_count = total_count
        self.ceiling = ceiling


class IncompleteResultsError(GitHubClientError):
    """Raised when GitHub flags a search page as incomplete (server timeout)."""

    def __init__(self) -> None:
        super().__init__(
            "Search results may be incomplete due to GitHub API limitations "
            "(timeouts or other issues). Please try again or narrow your date "
            "range for more reliable results."
        )


class RequestCancelledError(Exception):
    """Raised when a request is cancelled through its cancellation token.

    Not a user-facing failure; callers suppress it.
    """

    pass


class RequestSupersededError(RequestCancelledError):
    """Raised when a newer request replaced this one before it finished."""

    def __init__(self, request_id: int, current_id: int) -> None:
        super().__init__(f"Request {request_id} superseded by request {current_id}")
        self.request_id = request_id
        self.current_id = current_id
