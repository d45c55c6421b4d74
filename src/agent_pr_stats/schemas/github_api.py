"""Pydantic schemas for parsing GitHub API responses.

REST schemas map to GET /search/issues.
See: https://docs.github.com/en/rest/search/search#search-issues-and-pull-requests

GraphQL schemas map to the aliased `search` selections issued by the
GraphQL transport (see agent_pr_stats.github.transports.queries).
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# -----------------------------------------------------------------------------
# REST Search API
# -----------------------------------------------------------------------------


class SearchUser(BaseModel):
    """User object embedded in search results."""

    login: str | None = Field(default=None, description="GitHub username")


class SearchPullRequestRef(BaseModel):
    """The `pull_request` sub-object present on PR search hits."""

    merged_at: datetime | None = Field(default=None, description="When the PR was merged")


class SearchIssueItem(BaseModel):
    """A single item from the issue/PR search endpoint."""

    id: int = Field(description="Stable numeric ID")
    number: int = Field(description="PR number")
    title: str | None = Field(default=None, description="PR title")
    state: Literal["open", "closed"] = Field(description="PR state (open, closed)")
    created_at: datetime = Field(description="When PR was created")
    user: SearchUser | None = Field(default=None, description="PR author")
    html_url: str | None = Field(default=None, description="GitHub PR URL")
    pull_request: SearchPullRequestRef | None = Field(
        default=None, description="PR-specific fields (merge timestamp)"
    )


class SearchResponse(BaseModel):
    """Envelope returned by GET /search/issues."""

    total_count: int = Field(ge=0, description="Total matches reported by GitHub")
    incomplete_results: bool = Field(
        default=False, description="True when GitHub timed out and results may be partial"
    )
    items: list[SearchIssueItem] = Field(default_factory=list, description="Page of results")


# -----------------------------------------------------------------------------
# GraphQL API
# -----------------------------------------------------------------------------


class _GraphQLModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GraphQLAuthor(_GraphQLModel):
    """Author of a GraphQL PullRequest node."""

    login: str | None = None


class GraphQLPullRequest(_GraphQLModel):
    """PullRequest node selected by the PRFields fragment."""

    database_id: int = Field(alias="databaseId")
    number: int
    title: str | None = None
    state: Literal["OPEN", "CLOSED", "MERGED"]
    created_at: datetime = Field(alias="createdAt")
    merged_at: datetime | None = Field(default=None, alias="mergedAt")
    url: str | None = None
    author: GraphQLAuthor | None = None


class GraphQLPageInfo(_GraphQLModel):
    """Cursor pagination info."""

    has_next_page: bool = Field(default=False, alias="hasNextPage")
    end_cursor: str | None = Field(default=None, alias="endCursor")


class GraphQLSearchResult(_GraphQLModel):
    """Result of an aliased `search` selection."""

    issue_count: int = Field(ge=0, alias="issueCount")
    page_info: GraphQLPageInfo = Field(default_factory=GraphQLPageInfo, alias="pageInfo")
    nodes: list[GraphQLPullRequest] = Field(default_factory=list)

    @field_validator("nodes", mode="before")
    @classmethod
    def drop_empty_nodes(cls, v: Any) -> Any:
        """Drop non-PR nodes (the fragment yields `{}` for plain issues)."""
        if isinstance(v, list):
            return [node for node in v if node]
        return v


class CombinedQueryData(_GraphQLModel):
    """`data` of the combined first-page query."""

    agent_prs: GraphQLSearchResult = Field(alias="agentPRs")
    all_merged_prs: GraphQLSearchResult = Field(alias="allMergedPRs")
    total_count: GraphQLSearchResult = Field(alias="totalCount")
    merged_count: GraphQLSearchResult = Field(alias="mergedCount")
    open_count: GraphQLSearchResult = Field(alias="openCount")
    rate_limit: dict[str, Any] | None = Field(default=None, alias="rateLimit")


class SingleSearchQueryData(_GraphQLModel):
    """`data` of the single search query used for later pages."""

    search: GraphQLSearchResult
    rate_limit: dict[str, Any] | None = Field(default=None, alias="rateLimit")
