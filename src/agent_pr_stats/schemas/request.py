"""Pydantic schemas for fetch requests and repository input parsing."""

import re
from datetime import date
from typing import Self

from pydantic import Field, field_validator, model_validator

from .base import SchemaBase

_GITHUB_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def is_valid_github_name(name: str) -> bool:
    """Check an owner or repo segment against a conservative allowlist.

    Only letters, digits, hyphens, underscores and periods are allowed;
    "." and ".." are rejected.
    """
    if not name or name in (".", ".."):
        return False
    return bool(_GITHUB_NAME_PATTERN.match(name))


def parse_repo_string(repo_input: str) -> tuple[str, str]:
    """Parse an "owner/repo" string.

    Args:
        repo_input: Repository in owner/repo format

    Returns:
        Tuple of (owner, repo)

    Raises:
        ValueError: If the format is wrong or a segment contains invalid characters
    """
    parts = repo_input.strip().split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError('Please enter repository in "owner/repo" format')
    owner, repo = parts
    if not is_valid_github_name(owner) or not is_valid_github_name(repo):
        raise ValueError(
            "Invalid repository name. Names can only contain letters, numbers, "
            "hyphens, underscores, and periods."
        )
    return owner, repo


def validate_date_range(from_date: str, to_date: str) -> str | None:
    """Validate ISO date strings.

    Returns:
        An error message, or None when the range is valid
    """
    try:
        start = date.fromisoformat(from_date)
        end = date.fromisoformat(to_date)
    except (TypeError, ValueError):
        return "Invalid date format"
    if start > end:
        return "Start date must be before end date"
    return None


class FetchRequest(SchemaBase):
    """A normalized request for agent PRs in a repository and date range."""

    owner: str = Field(max_length=100, description="GitHub org or user")
    repo: str = Field(max_length=100, description="Repository name")
    from_date: date = Field(description="First day of the created-date range")
    to_date: date = Field(description="Last day of the created-date range (inclusive)")

    @field_validator("owner", "repo")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names outside the GitHub allowlist."""
        if not is_valid_github_name(v):
            raise ValueError(
                "Invalid repository name. Names can only contain letters, numbers, "
                "hyphens, underscores, and periods."
            )
        return v

    @model_validator(mode="after")
    def check_range(self) -> Self:
        """Ensure the range is not inverted."""
        if self.from_date > self.to_date:
            raise ValueError("Start date must be before end date")
        return self

    @classmethod
    def from_repo_string(cls, repo_input: str, from_date: str | date, to_date: str | date) -> Self:
        """
        Factory method to build a request from "owner/repo" input.

        Args:
            repo_input: Repository in owner/repo format
            from_date: Start date (ISO string or date)
            to_date: End date (ISO string or date)

        Returns:
            FetchRequest instance
        """
        owner, repo = parse_repo_string(repo_input)
        return cls(owner=owner, repo=repo, from_date=from_date, to_date=to_date)

    @property
    def full_name(self) -> str:
        """Repository path (owner/repo)."""
        return f"{self.owner}/{self.repo}"

    @property
    def date_qualifier(self) -> str:
        """Search qualifier for the created-date range."""
        return f"created:{self.from_date.isoformat()}..{self.to_date.isoformat()}"
