"""Canonical, transport-agnostic pull request record."""

from datetime import UTC, datetime
from typing import Self

from pydantic import Field, field_validator

from .base import SchemaBase
from .enums import PRState, PRStatus
from .github_api import GraphQLPullRequest, SearchIssueItem


class PRAuthor(SchemaBase):
    """Identity of the PR author."""

    login: str | None = Field(default=None, description="GitHub username")


class PullRequest(SchemaBase):
    """A pull request normalized from either the REST or GraphQL transport.

    A record with a non-null `merged_at` is merged regardless of `state`;
    a closed record without `merged_at` was closed without merge.

    Field aliases follow the REST wire names (`user`, `html_url`) so cached
    envelopes stay readable by other tools.
    """

    id: int = Field(description="Stable numeric ID")
    number: int = Field(description="PR number")
    title: str | None = Field(default=None, description="PR title")
    state: PRState = Field(description="PR state (open, closed)")
    merged_at: datetime | None = Field(default=None, description="When the PR was merged (UTC)")
    created_at: datetime = Field(description="When the PR was opened (UTC)")
    author: PRAuthor | None = Field(default=None, alias="user", description="PR author")
    url: str | None = Field(default=None, alias="html_url", description="GitHub PR URL")

    @field_validator("merged_at", "created_at")
    @classmethod
    def ensure_utc(cls, v: datetime | None) -> datetime | None:
        """Treat naive timestamps as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @property
    def is_merged(self) -> bool:
        """Check if PR was merged."""
        return self.merged_at is not None

    @property
    def status(self) -> PRStatus:
        """Display status: merged wins over the raw state."""
        if self.merged_at is not None:
            return PRStatus.MERGED
        if self.state == PRState.CLOSED:
            return PRStatus.CLOSED
        return PRStatus.OPEN

    @classmethod
    def from_search_item(cls, item: SearchIssueItem) -> Self:
        """
        Factory method to convert a REST search hit.

        Args:
            item: Parsed search result item

        Returns:
            PullRequest instance
        """
        return cls(
            id=item.id,
            number=item.number,
            title=item.title,
            state=PRState(item.state),
            merged_at=item.pull_request.merged_at if item.pull_request else None,
            created_at=item.created_at,
            author=PRAuthor(login=item.user.login) if item.user else None,
            url=item.html_url,
        )

    @classmethod
    def from_graphql_node(cls, node: GraphQLPullRequest) -> Self:
        """
        Factory method to convert a GraphQL PullRequest node.

        GraphQL reports MERGED and CLOSED separately; both map to the
        closed state and `merged_at` carries the distinction.

        Args:
            node: Parsed GraphQL node

        Returns:
            PullRequest instance
        """
        return cls(
            id=node.database_id,
            number=node.number,
            title=node.title,
            state=PRState.OPEN if node.state == "OPEN" else PRState.CLOSED,
            merged_at=node.merged_at,
            created_at=node.created_at,
            author=PRAuthor(login=node.author.login) if node.author else None,
            url=node.url,
        )


def prs_from_search_items(items: list[SearchIssueItem]) -> list[PullRequest]:
    """Convert a page of REST search hits to canonical records."""
    return [PullRequest.from_search_item(item) for item in items]


def prs_from_graphql_nodes(nodes: list[GraphQLPullRequest]) -> list[PullRequest]:
    """Convert a page of GraphQL nodes to canonical records."""
    return [PullRequest.from_graphql_node(node) for node in nodes]
