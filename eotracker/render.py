"""
Display model for the executive orders table.

render_table() is a pure projection from a ViewState to the rows, message and
pagination controls shown to the user. It performs no I/O.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional

from eotracker.records import ExecutiveOrder, parse_signing_date
from eotracker.table import STATUS_FAILED, STATUS_LOADING, ViewState

MAX_VISIBLE_PAGES = 5

LOADING_MESSAGE = "Loading executive orders..."
FAILED_MESSAGE = "Failed to load executive orders. Please try again later."
NO_RESULTS_MESSAGE = "No executive orders found matching your search."

# (sort field, header label)
COLUMNS = [
    ("number", "EO Number"),
    ("title", "Title"),
    ("date", "Signing Date"),
]


@dataclass
class Link:
    label: str
    url: str


@dataclass
class DisplayRow:
    number: str
    title: str
    signing_date: str
    links: List[Link] = field(default_factory=list)


@dataclass
class PageControl:
    label: str
    page: int
    active: bool = False
    disabled: bool = False


@dataclass
class ColumnHeader:
    field: str
    label: str
    active: bool = False
    ascending: bool = True


@dataclass
class TableDisplay:
    status: str
    rows: List[DisplayRow]
    message: Optional[str]
    pagination: List[PageControl]
    headers: List[ColumnHeader]
    current_page: int
    total_pages: int
    total: int
    search_term: str
    last_updated: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def format_date(date_string: Optional[str]) -> str:
    """Long US date ("January 20, 2025"); raw input if unparseable, 'Unknown' if absent."""
    if not date_string:
        return 'Unknown'
    parsed = parse_signing_date(date_string)
    if parsed is None:
        return str(date_string)
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_timestamp(timestamp: Optional[str]) -> str:
    """Short US date and time ("1/20/2025, 3:04:05 PM")."""
    if not timestamp:
        return 'Unknown'
    parsed = parse_signing_date(timestamp)
    if parsed is None:
        return str(timestamp)
    clock = parsed.strftime('%I:%M:%S %p').lstrip('0')
    return f"{parsed.month}/{parsed.day}/{parsed.year}, {clock}"


def render_row(order: ExecutiveOrder) -> DisplayRow:
    links = []
    if order.html_url:
        links.append(Link(label="View", url=order.html_url))
    if order.pdf_url:
        links.append(Link(label="PDF", url=order.pdf_url))

    return DisplayRow(
        number=order.order_number or 'N/A',
        title=order.title or 'Untitled',
        signing_date=format_date(order.signing_date),
        links=links,
    )


def page_window(current_page: int, total_pages: int) -> List[int]:
    """Up to MAX_VISIBLE_PAGES page numbers centred on current_page, clamped to [1, total_pages]."""
    start_page = max(1, current_page - MAX_VISIBLE_PAGES // 2)
    end_page = min(total_pages, start_page + MAX_VISIBLE_PAGES - 1)

    if end_page - start_page + 1 < MAX_VISIBLE_PAGES:
        start_page = max(1, end_page - MAX_VISIBLE_PAGES + 1)

    return list(range(start_page, end_page + 1))


def render_pagination(current_page: int, total_pages: int) -> List[PageControl]:
    if total_pages <= 1:
        return []

    controls = [PageControl(label="«", page=current_page - 1, disabled=current_page == 1)]
    for page in page_window(current_page, total_pages):
        controls.append(PageControl(label=str(page), page=page, active=page == current_page))
    controls.append(PageControl(label="»", page=current_page + 1, disabled=current_page == total_pages))
    return controls


def render_headers(state: ViewState) -> List[ColumnHeader]:
    sort = state.current_sort
    return [
        ColumnHeader(
            field=name,
            label=label,
            active=sort.field == name,
            ascending=sort.ascending if sort.field == name else True,
        )
        for name, label in COLUMNS
    ]


def render_table(state: ViewState) -> TableDisplay:
    rows: List[DisplayRow] = []
    pagination: List[PageControl] = []
    message: Optional[str] = None

    if state.status == STATUS_LOADING:
        message = LOADING_MESSAGE
    elif state.status == STATUS_FAILED:
        message = FAILED_MESSAGE
    else:
        page_orders = state.page_slice()
        if not page_orders:
            message = NO_RESULTS_MESSAGE
        else:
            rows = [render_row(order) for order in page_orders]
            pagination = render_pagination(state.current_page, state.total_pages)

    return TableDisplay(
        status=state.status,
        rows=rows,
        message=message,
        pagination=pagination,
        headers=render_headers(state),
        current_page=state.current_page,
        total_pages=state.total_pages,
        total=len(state.current_orders),
        search_term=state.search_term,
        last_updated=format_timestamp(state.last_updated) if state.status != STATUS_LOADING else '',
    )
