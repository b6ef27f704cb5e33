import json
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from eotracker.builder import create_sample_orders
from eotracker.records import parse_orders
from eotracker.table import TableController


def _raw_orders(count):
    return [
        {
            "title": f"Executive Order {14000 + i}: Order number {i}",
            "executive_order_number": str(14000 + i),
            "signing_date": f"2025-02-{(i % 28) + 1:02d}",
        }
        for i in range(count)
    ]


@pytest.fixture
def make_raw_orders():
    return _raw_orders


@pytest.fixture
def sample_orders():
    return create_sample_orders()


@pytest.fixture
def snapshot_file(tmp_path, sample_orders):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({
        "lastUpdated": "2025-01-20T15:04:05.000Z",
        "orders": sample_orders,
    }), encoding="utf-8")
    return path


@pytest.fixture
def loaded_controller(sample_orders):
    controller = TableController()
    controller.load_orders(parse_orders(sample_orders), "2025-01-20T15:04:05.000Z")
    return controller
