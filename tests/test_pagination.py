"""Tests for pagination primitives."""

import pytest

from warehouse_service.exceptions import WarehouseValidationError
from warehouse_service.services.pagination import (
    Page,
    PageRequest,
    SortOrder,
    parse_sort,
)


class TestPageRequest:
    """Tests for PageRequest validation and offsets."""

    def test_defaults(self) -> None:
        """Test that the first page uses the configured default size."""
        request = PageRequest()
        assert request.page == 0
        assert request.size == 20
        assert request.sort == ()
        assert request.offset == 0

    def test_offset(self) -> None:
        """Test that offset is page index times size."""
        assert PageRequest(page=3, size=10).offset == 30

    def test_negative_page_rejected(self) -> None:
        """Test that negative page indexes are rejected."""
        with pytest.raises(WarehouseValidationError):
            PageRequest(page=-1)

    def test_zero_size_rejected(self) -> None:
        """Test that empty pages cannot be requested."""
        with pytest.raises(WarehouseValidationError):
            PageRequest(size=0)

    def test_oversized_page_rejected(self) -> None:
        """Test that the maximum page size is enforced."""
        with pytest.raises(WarehouseValidationError):
            PageRequest(size=101)


class TestPage:
    """Tests for the Page container."""

    def test_total_pages_rounds_up(self) -> None:
        """Test that a partial last page still counts."""
        page = Page(items=[1, 2], total=21, page=0, page_size=10)
        assert page.total_pages == 3

    def test_total_pages_exact(self) -> None:
        """Test total pages when rows divide evenly."""
        page = Page(items=[], total=20, page=0, page_size=10)
        assert page.total_pages == 2

    def test_total_pages_empty(self) -> None:
        """Test that an empty result has no pages."""
        page = Page(items=[], total=0, page=0, page_size=20)
        assert page.total_pages == 0

    def test_map_keeps_totals(self) -> None:
        """Test that mapping converts items and keeps paging info."""
        page = Page(items=[1, 2, 3], total=13, page=1, page_size=3)
        mapped = page.map(str)
        assert mapped.items == ["1", "2", "3"]
        assert mapped.total == 13
        assert mapped.page == 1
        assert mapped.page_size == 3
        assert mapped.total_pages == 5


class TestParseSort:
    """Tests for sort value parsing."""

    def test_none_means_unsorted(self) -> None:
        """Test that a missing sort value yields no orders."""
        assert parse_sort(None) == ()
        assert parse_sort([]) == ()

    def test_property_only_defaults_to_ascending(self) -> None:
        """Test that direction defaults to ascending."""
        assert parse_sort(["name"]) == (SortOrder(attribute="name", direction="asc"),)

    def test_multiple_orders(self) -> None:
        """Test that multiple sort keys keep their order."""
        orders = parse_sort(["city,asc", "name,DESC"])
        assert orders == (
            SortOrder(attribute="city", direction="asc"),
            SortOrder(attribute="name", direction="desc"),
        )
        assert orders[1].descending is True

    def test_whitespace_is_ignored(self) -> None:
        """Test that spaces around parts are stripped."""
        assert parse_sort([" code , desc "]) == (
            SortOrder(attribute="code", direction="desc"),
        )

    @pytest.mark.parametrize("raw", ["", ",asc", "name,sideways", "name,asc,extra"])
    def test_invalid_values_rejected(self, raw: str) -> None:
        """Test that malformed sort values raise a validation error."""
        with pytest.raises(WarehouseValidationError):
            parse_sort([raw])
