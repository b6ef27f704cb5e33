"""
Tests for the table controller: load, sort, search and paginate.

Run with: python -m pytest tests/test_table_controller.py -v
"""

import asyncio
import json

import pytest

from eotracker.records import parse_orders
from eotracker.table import (
    STATUS_FAILED,
    STATUS_LOADING,
    STATUS_READY,
    TableController,
    compare_orders,
)


def numbers(orders):
    return [o.order_number for o in orders]


def controller_with(raw_orders):
    controller = TableController()
    controller.load_orders(parse_orders(raw_orders))
    return controller


class TestLoad:
    """Loading a snapshot into the controller."""

    def test_starts_loading_with_no_data(self):
        controller = TableController()

        assert controller.state.status == STATUS_LOADING
        assert controller.state.all_orders == []
        assert controller.is_loaded is False

    def test_load_sample_snapshot_lists_newest_first(self, snapshot_file):
        """Default sort after load is by number, descending."""
        controller = TableController()

        loaded = asyncio.run(controller.load(str(snapshot_file)))

        assert loaded is True
        assert controller.state.status == STATUS_READY
        assert numbers(controller.state.current_orders) == ["14086", "14085", "14084"]
        assert controller.state.current_sort.field == "number"
        assert controller.state.current_sort.ascending is False
        assert controller.state.last_updated == "2025-01-20T15:04:05.000Z"

    def test_all_orders_keep_snapshot_order(self, snapshot_file):
        controller = TableController()
        asyncio.run(controller.load(str(snapshot_file)))

        assert numbers(controller.state.all_orders) == ["14084", "14085", "14086"]

    def test_missing_file_fails_without_raising(self, tmp_path):
        controller = TableController()

        loaded = asyncio.run(controller.load(str(tmp_path / "missing.json")))

        assert loaded is False
        assert controller.state.status == STATUS_FAILED
        assert controller.state.all_orders == []
        assert controller.state.current_orders == []

    def test_malformed_json_fails(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        controller = TableController()

        assert asyncio.run(controller.load(str(path))) is False
        assert controller.state.status == STATUS_FAILED

    def test_orders_not_an_array_fails(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"lastUpdated": "x", "orders": {"a": 1}}), encoding="utf-8")
        controller = TableController()

        assert asyncio.run(controller.load(str(path))) is False
        assert controller.state.status == STATUS_FAILED

    def test_failed_reload_drops_previous_data(self, loaded_controller, tmp_path):
        assert loaded_controller.state.all_orders

        asyncio.run(loaded_controller.load(str(tmp_path / "missing.json")))

        assert loaded_controller.state.status == STATUS_FAILED
        assert loaded_controller.state.all_orders == []

    def test_records_missing_fields_are_tolerated(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({
            "lastUpdated": "2025-01-20T00:00:00.000Z",
            "orders": [{}, {"title": "Only a title"}, {"executive_order_number": "14001"}],
        }), encoding="utf-8")
        controller = TableController()

        assert asyncio.run(controller.load(str(path))) is True
        assert len(controller.state.current_orders) == 3


    def test_oversized_order_number_does_not_break_load(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({
            "lastUpdated": "2025-01-20T00:00:00.000Z",
            "orders": [{"executive_order_number": "9" * 5000}, {"executive_order_number": "14084"}],
        }), encoding="utf-8")
        controller = TableController()

        assert asyncio.run(controller.load(str(path))) is True
        assert controller.state.current_orders[0].order_number == "14084"


class TestSort:
    """Sorting the current view."""

    def test_numeric_sort_compares_as_integers(self):
        controller = controller_with([
            {"executive_order_number": "900"},
            {"executive_order_number": "14086"},
            {"executive_order_number": "14084"},
            {"executive_order_number": "14085"},
        ])
        # Load sorted descending; sorting the same field again toggles to ascending
        controller.sort("number")

        assert numbers(controller.state.current_orders) == ["900", "14084", "14085", "14086"]

    def test_missing_or_non_numeric_number_sorts_as_zero(self):
        controller = controller_with([
            {"executive_order_number": "14085", "title": "a"},
            {"title": "no number"},
            {"executive_order_number": "abc", "title": "bad number"},
        ])
        controller.sort("number")

        titles = [o.title for o in controller.state.current_orders]
        assert titles[-1] == "a"
        assert set(titles[:2]) == {"no number", "bad number"}

    def test_sort_twice_reverses(self, loaded_controller):
        loaded_controller.sort("title")
        first = list(loaded_controller.state.current_orders)

        loaded_controller.sort("title")

        assert loaded_controller.state.current_orders == list(reversed(first))

    def test_new_field_starts_ascending(self, loaded_controller):
        loaded_controller.sort("date")

        assert loaded_controller.state.current_sort.field == "date"
        assert loaded_controller.state.current_sort.ascending is True
        assert numbers(loaded_controller.state.current_orders) == ["14084", "14085", "14086"]

    def test_missing_date_sorts_first_ascending(self):
        controller = controller_with([
            {"executive_order_number": "1", "signing_date": "2025-03-01"},
            {"executive_order_number": "2"},
            {"executive_order_number": "3", "signing_date": "TBD"},
            {"executive_order_number": "4", "signing_date": "2025-01-01"},
        ])
        controller.sort("date")

        result = numbers(controller.state.current_orders)
        assert set(result[:2]) == {"2", "3"}
        assert result[2:] == ["4", "1"]

    def test_other_fields_compare_case_sensitive(self):
        controller = controller_with([
            {"title": "apple", "executive_order_number": "1"},
            {"title": "Banana", "executive_order_number": "2"},
            {"executive_order_number": "3"},
        ])
        controller.sort("title")

        assert [o.title for o in controller.state.current_orders] == [None, "Banana", "apple"]

    def test_sort_resets_page(self, make_raw_orders):
        controller = controller_with(make_raw_orders(25))
        controller.paginate(3)

        controller.sort("title")

        assert controller.state.current_page == 1

    def test_sort_never_mutates_all_orders(self, loaded_controller):
        before = list(loaded_controller.state.all_orders)

        loaded_controller.sort("date")
        loaded_controller.sort("date")

        assert loaded_controller.state.all_orders == before

    def test_comparator_is_three_way(self):
        low, high = parse_orders([
            {"executive_order_number": "14084"},
            {"executive_order_number": "14085"},
        ])

        assert compare_orders(low, high, "number", True) == -1
        assert compare_orders(high, low, "number", True) == 1
        assert compare_orders(low, high, "number", False) == 1
        assert compare_orders(low, low, "number", True) == 0


class TestSearch:
    """Filtering by title or order number."""

    def test_search_border_finds_one_record(self, loaded_controller):
        loaded_controller.search("border")

        assert [o.title for o in loaded_controller.state.current_orders] == [
            "Executive Order 14086: Strengthening Border Security"
        ]

    def test_search_is_trimmed_and_case_insensitive(self, loaded_controller):
        loaded_controller.search("  BORDER  ")

        assert numbers(loaded_controller.state.current_orders) == ["14086"]
        assert loaded_controller.state.search_term == "border"

    def test_search_matches_order_number_substring(self, loaded_controller):
        loaded_controller.search("1408")
        assert len(loaded_controller.state.current_orders) == 3

        loaded_controller.search("14085")
        assert numbers(loaded_controller.state.current_orders) == ["14085"]

    def test_search_matches_integer_order_numbers(self):
        controller = controller_with([{"executive_order_number": 14090, "title": "Untitled thing"}])

        controller.search("1409")

        assert len(controller.state.current_orders) == 1

    def test_zero_order_number_is_not_searched(self):
        controller = controller_with([{"executive_order_number": 0, "title": "Untitled thing"}])

        controller.search("0")

        assert controller.state.current_orders == []

    def test_search_no_matches(self, loaded_controller):
        loaded_controller.search("zzz")

        assert loaded_controller.state.current_orders == []
        assert loaded_controller.state.total_pages == 0

    def test_empty_search_restores_snapshot_order_without_resorting(self, loaded_controller):
        assert numbers(loaded_controller.state.current_orders) == ["14086", "14085", "14084"]

        loaded_controller.search("border")
        loaded_controller.search("")

        assert loaded_controller.state.current_orders == loaded_controller.state.all_orders
        assert numbers(loaded_controller.state.current_orders) == ["14084", "14085", "14086"]
        assert loaded_controller.state.current_sort.field == "number"

    def test_search_keeps_the_same_record_objects(self, loaded_controller):
        loaded_controller.search("order")

        for order in loaded_controller.state.current_orders:
            assert any(order is original for original in loaded_controller.state.all_orders)

    def test_search_resets_page(self, make_raw_orders):
        controller = controller_with(make_raw_orders(25))
        controller.paginate(2)

        controller.search("order")

        assert controller.state.current_page == 1


class TestPaginate:
    """Page window over the current view."""

    def test_total_pages_for_25_records(self, make_raw_orders):
        controller = controller_with(make_raw_orders(25))

        assert controller.state.total_pages == 3

    def test_last_page_has_remainder(self, make_raw_orders):
        controller = controller_with(make_raw_orders(25))

        assert controller.paginate(3) is True
        assert controller.state.current_page == 3
        assert len(controller.state.page_slice()) == 5

    def test_first_page_has_ten(self, make_raw_orders):
        controller = controller_with(make_raw_orders(25))

        assert len(controller.state.page_slice()) == 10

    @pytest.mark.parametrize("page", [0, -1, 4, 100])
    def test_out_of_range_is_ignored(self, page, make_raw_orders):
        controller = controller_with(make_raw_orders(25))
        controller.paginate(2)

        assert controller.paginate(page) is False
        assert controller.state.current_page == 2

    def test_paginate_empty_view(self):
        controller = TableController()

        assert controller.paginate(1) is False
        assert controller.state.current_page == 1
        assert controller.state.page_slice() == []
