"""Analytics over acquired pull requests.

All functions are pure: they take canonical records and return new values.
"""

from .charts import ChartSeries, bucket_by_date
from .classification import (
    PRCounts,
    classify,
    filter_prs,
    get_pr_status,
    round_half_up,
    sort_prs_by_date,
)
from .pagination import ITEMS_PER_PAGE, Page, format_pr_number, page_numbers_to_show, paginate
from .response_time import (
    BUCKET_DEFINITIONS,
    ResponseTimeBucket,
    ResponseTimeMetrics,
    format_duration,
    merge_latencies,
    response_time_metrics,
)

__all__ = [
    # Classification
    "PRCounts",
    "classify",
    "filter_prs",
    "get_pr_status",
    "round_half_up",
    "sort_prs_by_date",
    # Charts
    "ChartSeries",
    "bucket_by_date",
    # Response time
    "BUCKET_DEFINITIONS",
    "ResponseTimeBucket",
    "ResponseTimeMetrics",
    "format_duration",
    "merge_latencies",
    "response_time_metrics",
    # Pagination
    "ITEMS_PER_PAGE",
    "Page",
    "format_pr_number",
    "page_numbers_to_show",
    "paginate",
]
