"""Transport adapters for GitHub issue search.

This module provides:
- RestSearchTransport: REST Search API (anonymous access)
- GraphQLTransport: GraphQL API with combined first-page query (token required)
- collect_all_pages: Shared pagination loop with truncation handling
"""

from .base import (
    CollectedResults,
    CombinedPage,
    PRSearchTransport,
    SearchCount,
    SearchPage,
    collect_all_pages,
    select_transport,
)
from .graphql import GraphQLTransport
from .queries import (
    GRAPHQL_COMBINED_QUERY,
    GRAPHQL_SEARCH_QUERY,
    ComparisonQueries,
    build_base_query,
    build_merged_query,
    build_open_query,
    build_search_query,
)
from .rest import RestSearchTransport

__all__ = [
    # Contract
    "CollectedResults",
    "CombinedPage",
    "PRSearchTransport",
    "SearchCount",
    "SearchPage",
    "collect_all_pages",
    "select_transport",
    # Transports
    "GraphQLTransport",
    "RestSearchTransport",
    # Queries
    "GRAPHQL_COMBINED_QUERY",
    "GRAPHQL_SEARCH_QUERY",
    "ComparisonQueries",
    "build_base_query",
    "build_merged_query",
    "build_open_query",
    "build_search_query",
]
