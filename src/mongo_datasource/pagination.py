"""Page arithmetic for offset-based listings."""

from __future__ import annotations

import math
from typing import Any, NamedTuple


class PageInfo(NamedTuple):
    """Navigation info for one page of a listing."""

    total_count: int
    current_page: int
    has_prev_page: bool
    has_next_page: bool
    total_pages: int
    prev_page: int
    next_page: int


class Page(NamedTuple):
    """One page of documents plus its navigation info."""

    total_count: int
    current_page: int
    has_prev_page: bool
    has_next_page: bool
    total_pages: int
    prev_page: int
    next_page: int
    node: list[Any]


def normalize_page(page: Any) -> int:
    """Return *page* as an int >= 1; unreadable values fall back to 1."""
    try:
        return max(1, int(page))
    except (TypeError, ValueError):
        return 1


def skip_for(page: int, limit: int) -> int:
    """Number of documents to skip to reach *page* (1-based)."""
    return (normalize_page(page) - 1) * max(0, limit)


def paginate(total_count: int, page: int, limit: int) -> PageInfo:
    """Compute navigation info; ``prev_page``/``next_page`` are 0 when absent."""
    page = normalize_page(page)
    total_pages = math.ceil(total_count / limit) if limit > 0 else 0
    has_prev = page > 1
    has_next = page < total_pages
    return PageInfo(
        total_count=total_count,
        current_page=page,
        has_prev_page=has_prev,
        has_next_page=has_next,
        total_pages=total_pages,
        prev_page=page - 1 if has_prev else 0,
        next_page=page + 1 if has_next else 0,
    )


def build_page(total_count: int, page: int, limit: int, node: list[Any]) -> Page:
    """Wrap *node* with the navigation info of *page*."""
    return Page(*paginate(total_count, page, limit), node=node)
