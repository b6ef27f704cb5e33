"""
Snapshot file I/O.

A snapshot is a UTF-8 JSON document of the form
    {"lastUpdated": "<ISO-8601>", "orders": [<record>, ...]}
written once per build and read once per controller load.
"""

import os
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from eotracker import config
from eotracker.errors import SnapshotLoadError, SnapshotWriteError
from eotracker.records import ExecutiveOrder, parse_orders

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    last_updated: Optional[str]
    orders: List[ExecutiveOrder]


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def is_remote_source(source: str) -> bool:
    return source.startswith('http://') or source.startswith('https://')


def parse_snapshot(data: Any, source: str = "") -> Snapshot:
    if not isinstance(data, dict):
        raise SnapshotLoadError("Snapshot body is not a JSON object", source)
    orders = data.get('orders')
    if not isinstance(orders, list):
        raise SnapshotLoadError("Snapshot 'orders' is not an array", source)
    return Snapshot(last_updated=data.get('lastUpdated'), orders=parse_orders(orders))


async def fetch_snapshot_body(source: str, timeout: float) -> Any:
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(source)
            response.raise_for_status()
        return response.json()
    except httpx.HTTPError as e:
        raise SnapshotLoadError(f"Failed to fetch snapshot: {e}", source) from e
    except ValueError as e:
        raise SnapshotLoadError(f"Malformed snapshot body: {e}", source) from e


def read_snapshot_body(path: str) -> Any:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except OSError as e:
        raise SnapshotLoadError(f"Failed to read snapshot: {e}", path) from e
    except ValueError as e:
        raise SnapshotLoadError(f"Malformed snapshot body: {e}", path) from e


async def load_snapshot(source: str, timeout: Optional[float] = None) -> Snapshot:
    """
    Load a snapshot from a file path or an http(s) URL.

    Raises:
        SnapshotLoadError: transport error, non-2xx response, unreadable file,
            malformed JSON, or an 'orders' value that is not an array.
    """
    if timeout is None:
        timeout = config.REQUEST_TIMEOUT

    if is_remote_source(source):
        data = await fetch_snapshot_body(source, timeout)
    else:
        data = read_snapshot_body(source)

    return parse_snapshot(data, source)


def save_snapshot(orders: List[Dict[str, Any]], output_path: str,
                  now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Write orders to output_path with a fresh lastUpdated timestamp.

    Returns the document that was written.

    Raises:
        SnapshotWriteError: the directory or file could not be written.
    """
    data = {
        'lastUpdated': utc_timestamp(now),
        'orders': orders,
    }

    try:
        directory = os.path.dirname(os.path.abspath(output_path))
        os.makedirs(directory, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(json.dumps(data, indent=2, ensure_ascii=False))
    except (OSError, TypeError) as e:
        raise SnapshotWriteError(f"Failed to write snapshot: {e}", output_path) from e

    logger.info(f"Data saved to {output_path}")
    return data
