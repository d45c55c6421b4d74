"""Pydantic schemas for Agent PR Stats.

This module provides the canonical records, GitHub wire schemas,
and request validation helpers.
"""

from .base import SchemaBase
from .counts import AllPRCounts, adjust_closed_count
from .enums import PRFilterStatus, PRState, PRStatus
from .github_api import (
    CombinedQueryData,
    GraphQLPullRequest,
    GraphQLSearchResult,
    SearchIssueItem,
    SearchResponse,
    SingleSearchQueryData,
)
from .pr import PRAuthor, PullRequest, prs_from_graphql_nodes, prs_from_search_items
from .request import (
    FetchRequest,
    is_valid_github_name,
    parse_repo_string,
    validate_date_range,
)

__all__ = [
    # Base
    "SchemaBase",
    # Canonical records
    "AllPRCounts",
    "PRAuthor",
    "PullRequest",
    "adjust_closed_count",
    "prs_from_graphql_nodes",
    "prs_from_search_items",
    # Enums
    "PRFilterStatus",
    "PRState",
    "PRStatus",
    # GitHub API
    "CombinedQueryData",
    "GraphQLPullRequest",
    "GraphQLSearchResult",
    "SearchIssueItem",
    "SearchResponse",
    "SingleSearchQueryData",
    # Requests
    "FetchRequest",
    "is_valid_github_name",
    "parse_repo_string",
    "validate_date_range",
]
