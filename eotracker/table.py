"""
Table controller for executive order records.

Holds the full record set loaded from a snapshot and a derived view that is
filtered by search and ordered by sort. Pagination is a window over the view.
One controller is owned by one interactive session; every operation runs to
completion before the next one starts.
"""

import math
import logging
from datetime import datetime
from functools import cmp_to_key
from typing import Any, List, Optional

from eotracker.errors import SnapshotLoadError
from eotracker.records import ExecutiveOrder
from eotracker.snapshot import load_snapshot

logger = logging.getLogger(__name__)

ORDERS_PER_PAGE = 10

STATUS_LOADING = "loading"
STATUS_READY = "ready"
STATUS_FAILED = "failed"


class SortState:
    def __init__(self, field: str = "number", ascending: bool = True):
        self.field = field
        self.ascending = ascending

    def __repr__(self) -> str:
        return f"SortState(field={self.field!r}, ascending={self.ascending})"


class ViewState:
    """Everything the renderer needs; owned by a single TableController."""

    def __init__(self):
        self.status = STATUS_LOADING
        self.all_orders: List[ExecutiveOrder] = []
        self.current_orders: List[ExecutiveOrder] = []
        # Load toggles this to descending so the newest order is listed first
        self.current_sort = SortState("number", ascending=True)
        self.current_page = 1
        self.last_updated: Optional[str] = None
        self.search_term = ""

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.current_orders) / ORDERS_PER_PAGE)

    def page_slice(self) -> List[ExecutiveOrder]:
        start = (self.current_page - 1) * ORDERS_PER_PAGE
        return self.current_orders[start:start + ORDERS_PER_PAGE]


def sort_value(order: ExecutiveOrder, field: str) -> Any:
    """Comparable value of an order for a sort field; absent values get a default."""
    if field == "number":
        return order.number if order.number is not None else 0
    if field == "date":
        return order.signed_on if order.signed_on is not None else datetime.min
    value = order.get(field)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def compare_orders(a: ExecutiveOrder, b: ExecutiveOrder, field: str, ascending: bool) -> int:
    value_a = sort_value(a, field)
    value_b = sort_value(b, field)
    if value_a < value_b:
        return -1 if ascending else 1
    if value_a > value_b:
        return 1 if ascending else -1
    return 0


def matches_search(order: ExecutiveOrder, term: str) -> bool:
    title = order.title
    if title and term in str(title).casefold():
        return True
    if not order.get('executive_order_number'):
        return False
    return term in order.order_number


class TableController:
    """Sort, search and paginate over a loaded snapshot."""

    def __init__(self, state: Optional[ViewState] = None):
        self.state = state or ViewState()

    async def load(self, source: str) -> bool:
        """
        Load the snapshot at source and apply the default number sort.

        Returns True when the controller is ready. A failure leaves the
        controller in the failed state with no data; it is never raised.
        """
        try:
            snapshot = await load_snapshot(source)
        except SnapshotLoadError as e:
            logger.error(f"Error fetching executive orders from {source}: {e}")
            self.state = ViewState()
            self.state.status = STATUS_FAILED
            return False

        return self.load_orders(snapshot.orders, snapshot.last_updated)

    def load_orders(self, orders: List[ExecutiveOrder], last_updated: Optional[str] = None) -> bool:
        """Replace the view with orders and apply the default number sort."""
        self.state = ViewState()
        self.state.all_orders = list(orders)
        self.state.current_orders = list(self.state.all_orders)
        self.state.last_updated = last_updated
        self.state.status = STATUS_READY
        logger.info(f"Loaded {len(self.state.all_orders)} executive orders")
        self.sort("number")
        return True

    def sort(self, field: str) -> None:
        """Toggle direction on the active field, otherwise sort ascending by field."""
        sort_state = self.state.current_sort
        if sort_state.field == field:
            sort_state.ascending = not sort_state.ascending
        else:
            sort_state.field = field
            sort_state.ascending = True

        ascending = sort_state.ascending
        self.state.current_orders = sorted(
            self.state.current_orders,
            key=cmp_to_key(lambda a, b: compare_orders(a, b, field, ascending)),
        )
        self.state.current_page = 1

    def search(self, term: Optional[str]) -> None:
        """
        Filter by title or order number. An empty term restores every order in
        snapshot order; the last sort is not re-applied.
        """
        normalized = (term or "").strip().casefold()
        self.state.search_term = normalized

        if normalized == "":
            self.state.current_orders = list(self.state.all_orders)
        else:
            self.state.current_orders = [
                order for order in self.state.all_orders if matches_search(order, normalized)
            ]

        self.state.current_page = 1

    def paginate(self, page: int) -> bool:
        """Move to page; out-of-range requests are ignored and return False."""
        if page < 1 or page > self.state.total_pages:
            return False
        self.state.current_page = page
        return True

    @property
    def is_loaded(self) -> bool:
        return self.state.status == STATUS_READY
