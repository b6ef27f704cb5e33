"""
Typed executive order records.

Registry records are semi-structured: any field may be missing. The order
number and signing date are resolved once when a snapshot is loaded so that
sorting never re-parses strings.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser

SNAPSHOT_FIELDS = [
    'title',
    'document_number',
    'executive_order_number',
    'signing_date',
    'publication_date',
    'html_url',
    'pdf_url',
    'citation',
]

_LEADING_INT_RE = re.compile(r'^\s*([+-]?\d+)')


def parse_order_number(value: Any) -> Optional[int]:
    """Leading integer of an order number ("14084" -> 14084, "abc" -> None)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Beyond the interpreter's int conversion limit
        return None


def parse_signing_date(value: Any) -> Optional[datetime]:
    """Parse a signing date to a naive datetime, or None if absent or unparseable."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


@dataclass(eq=False)
class ExecutiveOrder:
    """One executive order with its number and signing date resolved."""
    raw: Dict[str, Any]
    number: Optional[int] = None
    signed_on: Optional[datetime] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ExecutiveOrder":
        return cls(
            raw=raw,
            number=parse_order_number(raw.get('executive_order_number')),
            signed_on=parse_signing_date(raw.get('signing_date')),
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    @property
    def title(self) -> Optional[str]:
        return self.raw.get('title')

    @property
    def order_number(self) -> Optional[str]:
        value = self.raw.get('executive_order_number')
        if value is None or value == '':
            return None
        return str(value)

    @property
    def signing_date(self) -> Optional[str]:
        return self.raw.get('signing_date')

    @property
    def html_url(self) -> Optional[str]:
        return self.raw.get('html_url')

    @property
    def pdf_url(self) -> Optional[str]:
        return self.raw.get('pdf_url')


def parse_orders(raw_orders: List[Any]) -> List[ExecutiveOrder]:
    # Non-object entries carry no fields; treat them as empty records
    return [ExecutiveOrder.from_dict(r if isinstance(r, dict) else {}) for r in raw_orders]
