"""Unit tests for the shared pagination protocol."""

import pytest

from shared_kernel.exceptions import InvalidInputError
from shared_kernel.pagination import Page, PageRequest


class TestPageRequest:
    """Tests for PageRequest.create bounds."""

    def test_keeps_limit_within_bounds(self):
        request = PageRequest.create(page=2, limit=5, max_limit=100)

        assert request.page == 2
        assert request.limit == 5
        assert request.offset == 5

    def test_clamps_limit_to_max(self):
        request = PageRequest.create(page=1, limit=10_000, max_limit=100)
        assert request.limit == 100

    @pytest.mark.parametrize("page", [0, -1])
    def test_rejects_page_below_one(self, page):
        with pytest.raises(InvalidInputError):
            PageRequest.create(page=page, limit=10, max_limit=100)

    @pytest.mark.parametrize("limit", [0, -5])
    def test_rejects_limit_below_one(self, limit):
        with pytest.raises(InvalidInputError):
            PageRequest.create(page=1, limit=limit, max_limit=100)

    def test_first_page_has_no_offset(self):
        assert PageRequest.create(page=1, limit=10, max_limit=100).offset == 0

    @pytest.mark.parametrize(
        "page,total,expected",
        [(1, 0, False), (2, 10, True), (2, 11, False), (10**18, 1, True)],
    )
    def test_is_past(self, page, total, expected):
        request = PageRequest.create(page=page, limit=10, max_limit=100)

        assert request.is_past(total) is expected


class TestPage:
    """Tests for Page metadata."""

    @pytest.mark.parametrize(
        ("total", "limit", "expected"),
        [(0, 10, 0), (15, 10, 2), (20, 10, 2), (1, 10, 1)],
    )
    def test_total_pages(self, total, limit, expected):
        assert Page(items=[], total=total, page=1, limit=limit).total_pages == expected

    def test_out_of_range_page_keeps_total(self):
        """Pages past the end carry no items but report the full total."""
        page = Page(items=[], total=15, page=99, limit=10)

        assert page.items == []
        assert page.total == 15
        assert page.total_pages == 2

    def test_map_applies_function_and_keeps_metadata(self):
        page = Page(items=[1, 2, 3], total=13, page=2, limit=3)

        mapped = page.map(lambda n: n * 10)

        assert mapped.items == [10, 20, 30]
        assert (mapped.total, mapped.page, mapped.limit) == (13, 2, 3)

    def test_with_items_replaces_items(self):
        page = Page(items=["a"], total=1, page=1, limit=10)

        replaced = page.with_items(["b", "c"])

        assert replaced.items == ["b", "c"]
        assert replaced.total == 1
