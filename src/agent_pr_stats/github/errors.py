"""Map GitHub HTTP failures to the client exception taxonomy."""

from __future__ import annotations

from typing import Any

from githubkit.exception import GitHubException, RequestFailed

from agent_pr_stats.logging import get_logger

from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubForbiddenError,
    GitHubNotFoundError,
    GitHubQueryRejectedError,
    GitHubRateLimitError,
)
from .rate_limit import RateLimitInfo, extract_rate_limit

logger = get_logger(__name__)


def _validation_detail(body: Any) -> str:
    """First error message from a 422 body, or an empty string."""
    if not isinstance(body, dict):
        return ""
    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        message = errors[0].get("message")
        if isinstance(message, str):
            return message
    return ""


def error_from_status(
    status: int,
    rate_limit: RateLimitInfo | None,
    body: Any = None,
) -> GitHubClientError:
    """Build the exception for a failed GitHub response.

    A 403 is a rate limit error only when remaining quota is exactly zero;
    otherwise it points at permissions, SSO or abuse protection.

    Args:
        status: HTTP status code
        rate_limit: Quota reading from the failed response (if any)
        body: Parsed JSON body (only inspected for 422)

    Returns:
        The exception to raise
    """
    if status == 404:
        return GitHubNotFoundError("Repository not found")

    if status == 401:
        return GitHubAuthenticationError(
            "Authentication failed. Please check that your GitHub token is valid."
        )

    if status == 403:
        if rate_limit is not None and rate_limit.remaining == 0:
            reset_at = rate_limit.reset_at if rate_limit.reset else None
            reset_str = reset_at.strftime("%Y-%m-%d %H:%M:%S UTC") if reset_at else "unknown"
            return GitHubRateLimitError(
                f"API rate limit reached. Reset at: {reset_str}. "
                "Try again later or use a different token.",
                reset_at=reset_at,
            )
        return GitHubForbiddenError(
            "Access forbidden (HTTP 403). This may be due to insufficient permissions, "
            "SSO not being authorized, or temporary abuse protection on the GitHub API."
        )

    if status == 422:
        detail = _validation_detail(body)
        if "cannot be searched" in detail.lower():
            return GitHubQueryRejectedError(
                "Search query validation failed. The repository or author filter could "
                "not be resolved. This may happen if the repository does not exist, you "
                "do not have permission to access it, or the coding agent app is not "
                "installed on the repository. Please verify the repository name and "
                "ensure your token has access."
            )
        return GitHubQueryRejectedError(
            f"Search query validation failed. {detail or 'Please check the repository name.'}"
        )

    return GitHubClientError(f"GitHub API Error: {status}")


def error_from_request_failed(error: RequestFailed) -> GitHubClientError:
    """Convert a githubkit RequestFailed into our exception taxonomy."""
    response = error.response
    status = response.status_code
    rate_limit = extract_rate_limit(getattr(response, "headers", None))

    body: Any = None
    if status == 422:
        try:
            body = response.json()
        except (ValueError, AttributeError, TypeError):
            logger.debug("Could not parse 422 response body")

    return error_from_status(status, rate_limit, body)


def error_from_transport_failure(error: GitHubException) -> GitHubClientError:
    """Convert a githubkit network-level failure (timeout, connection error)."""
    return GitHubClientError(f"GitHub request failed: {error}")
