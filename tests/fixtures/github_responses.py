"""Mock GitHub API response fixtures.

These fixtures represent realistic GitHub responses for testing schema
parsing and conversion logic:
- GET /search/issues bodies (REST transport)
- GraphQL `data` envelopes for the combined and single search queries
- Error bodies for the status codes the client maps

See: https://docs.github.com/en/rest/search/search#search-issues-and-pull-requests
"""

from tests.conftest import JAN_05_ISO, JAN_05_NOON_ISO, JAN_06_ISO, JAN_08_ISO
from tests.factories import (
    make_combined_data,
    make_graphql_node,
    make_search_item,
    make_search_response,
)

# -----------------------------------------------------------------------------
# REST Search Items
# -----------------------------------------------------------------------------
SEARCH_ITEM_OPEN = make_search_item(101, state="open", created_at=JAN_05_ISO)

SEARCH_ITEM_MERGED = make_search_item(
    102, state="closed", created_at=JAN_05_ISO, merged_at=JAN_05_NOON_ISO
)

SEARCH_ITEM_CLOSED = make_search_item(
    103, state="closed", created_at=JAN_06_ISO, merged_at=None
)

# A search hit without the pull_request sub-object (plain issue shape)
SEARCH_ITEM_NO_PR_REF = make_search_item(104, created_at=JAN_08_ISO, pull_request=None)

SEARCH_RESPONSE_MIXED = make_search_response(
    [SEARCH_ITEM_OPEN, SEARCH_ITEM_MERGED, SEARCH_ITEM_CLOSED]
)

SEARCH_RESPONSE_EMPTY = make_search_response([])

SEARCH_RESPONSE_INCOMPLETE = make_search_response([SEARCH_ITEM_OPEN], incomplete_results=True)

# Missing the required total_count field
SEARCH_RESPONSE_MALFORMED = {"items": [SEARCH_ITEM_OPEN]}


# -----------------------------------------------------------------------------
# GraphQL Nodes
# -----------------------------------------------------------------------------
GRAPHQL_NODE_OPEN = make_graphql_node(201, state="OPEN", created_at=JAN_05_ISO)

GRAPHQL_NODE_MERGED = make_graphql_node(
    202, state="MERGED", created_at=JAN_05_ISO, merged_at=JAN_05_NOON_ISO
)

GRAPHQL_NODE_CLOSED = make_graphql_node(203, state="CLOSED", created_at=JAN_06_ISO)

GRAPHQL_COMBINED_DATA = make_combined_data(
    agent_nodes=[GRAPHQL_NODE_OPEN, GRAPHQL_NODE_MERGED, GRAPHQL_NODE_CLOSED],
    merged_nodes=[GRAPHQL_NODE_MERGED],
    total=40,
    merged=25,
    open=10,
)


# -----------------------------------------------------------------------------
# Error Bodies
# -----------------------------------------------------------------------------
ERROR_422_CANNOT_BE_SEARCHED = {
    "message": "Validation Failed",
    "errors": [
        {
            "message": (
                "The listed users and repositories cannot be searched either because "
                "the resources do not exist or you do not have permission to view them."
            ),
            "resource": "Search",
            "field": "q",
            "code": "invalid",
        }
    ],
    "documentation_url": "https://docs.github.com/v3/search/",
}

ERROR_422_OTHER = {
    "message": "Validation Failed",
    "errors": [{"message": "Query is too long", "resource": "Search", "code": "invalid"}],
}
