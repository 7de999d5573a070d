"""Unit tests for page arithmetic."""

from __future__ import annotations

import pytest

from mongo_datasource.pagination import (
    Page,
    build_page,
    normalize_page,
    paginate,
    skip_for,
)


class TestPaginate:
    def test_first_page(self):
        info = paginate(total_count=45, page=1, limit=20)
        assert info.total_pages == 3
        assert not info.has_prev_page
        assert info.has_next_page
        assert info.prev_page == 0
        assert info.next_page == 2

    def test_middle_page(self):
        info = paginate(total_count=45, page=2, limit=20)
        assert (info.prev_page, info.next_page) == (1, 3)

    def test_last_page(self):
        info = paginate(total_count=45, page=3, limit=20)
        assert info.has_prev_page
        assert not info.has_next_page
        assert info.next_page == 0

    def test_no_documents(self):
        info = paginate(total_count=0, page=1, limit=20)
        assert info.total_pages == 0
        assert not info.has_next_page
        assert not info.has_prev_page

    def test_zero_limit_has_no_pages(self):
        assert paginate(total_count=10, page=1, limit=0).total_pages == 0


class TestPageHelpers:
    @pytest.mark.parametrize(
        ("page", "expected"), [(3, 3), (0, 1), (-2, 1), ("2", 2), ("x", 1), (None, 1)]
    )
    def test_normalize_page(self, page, expected):
        assert normalize_page(page) == expected

    def test_skip_for(self):
        assert skip_for(1, 20) == 0
        assert skip_for(3, 20) == 40
        assert skip_for(0, 20) == 0

    def test_build_page(self):
        page = build_page(total_count=3, page=1, limit=2, node=["a", "b"])
        assert isinstance(page, Page)
        assert page.node == ["a", "b"]
        assert page.total_pages == 2
        assert page.current_page == 1
