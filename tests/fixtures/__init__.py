"""Test fixtures for Agent PR Stats."""

from .github_responses import (
    ERROR_422_CANNOT_BE_SEARCHED,
    ERROR_422_OTHER,
    GRAPHQL_COMBINED_DATA,
    GRAPHQL_NODE_CLOSED,
    GRAPHQL_NODE_MERGED,
    GRAPHQL_NODE_OPEN,
    SEARCH_ITEM_CLOSED,
    SEARCH_ITEM_MERGED,
    SEARCH_ITEM_NO_PR_REF,
    SEARCH_ITEM_OPEN,
    SEARCH_RESPONSE_EMPTY,
    SEARCH_RESPONSE_INCOMPLETE,
    SEARCH_RESPONSE_MALFORMED,
    SEARCH_RESPONSE_MIXED,
)

__all__ = [
    # Error bodies
    "ERROR_422_CANNOT_BE_SEARCHED",
    "ERROR_422_OTHER",
    # GraphQL payloads
    "GRAPHQL_COMBINED_DATA",
    "GRAPHQL_NODE_CLOSED",
    "GRAPHQL_NODE_MERGED",
    "GRAPHQL_NODE_OPEN",
    # REST search payloads
    "SEARCH_ITEM_CLOSED",
    "SEARCH_ITEM_MERGED",
    "SEARCH_ITEM_NO_PR_REF",
    "SEARCH_ITEM_OPEN",
    "SEARCH_RESPONSE_EMPTY",
    "SEARCH_RESPONSE_INCOMPLETE",
    "SEARCH_RESPONSE_MALFORMED",
    "SEARCH_RESPONSE_MIXED",
]
