"""Enums for Pydantic schemas."""

from enum import Enum


class PRState(str, Enum):
    """Pull request state as reported by GitHub.

    GitHub reports merged PRs as closed; use PRStatus to tell them apart.
    """

    OPEN = "open"
    CLOSED = "closed"


class PRStatus(str, Enum):
    """Display status of a pull request."""

    MERGED = "merged"
    CLOSED = "closed"  # closed without merge
    OPEN = "open"


class PRFilterStatus(str, Enum):
    """Status filter for PR lists ('all' disables filtering)."""

    ALL = "all"
    MERGED = "merged"
    CLOSED = "closed"
    OPEN = "open"
