"""List pagination helpers for PR views."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

ITEMS_PER_PAGE = 10
ELLIPSIS = "..."

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a list."""

    items: list[T]
    page: int
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(records: Sequence[T], page: int = 1, per_page: int = ITEMS_PER_PAGE) -> Page[T]:
    """Slice `records` into the requested page.

    The page number is clamped to the valid range; an empty list has one
    empty page.
    """
    total_pages = max(1, math.ceil(len(records) / per_page))
    current = min(max(1, page), total_pages)
    start = (current - 1) * per_page
    return Page(
        items=list(records[start : start + per_page]),
        page=current,
        total_pages=total_pages,
        total_items=len(records),
    )


def page_numbers_to_show(current: int, total: int) -> list[int | str]:
    """Page links to render, with "..." standing in for skipped runs.

    Up to 7 pages are all shown. Beyond that the first and last page are
    always shown along with the neighbours of the current page.

    Examples:
        page_numbers_to_show(5, 10) -> [1, "...", 4, 5, 6, "...", 10]
    """
    delta = 1
    if total <= 7:
        return list(range(1, total + 1))

    pages: list[int | str] = [1]
    if current > delta + 2:
        pages.append(ELLIPSIS)

    start = max(2, current - delta)
    end = min(total - 1, current + delta)
    pages.extend(range(start, end + 1))

    if current < total - delta - 1:
        pages.append(ELLIPSIS)

    pages.append(total)
    return pages


def format_pr_number(number: object) -> str:
    """Format a PR number as "#123", or "" when it is not a positive integer."""
    if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
        return ""
    return f"#{number}"
