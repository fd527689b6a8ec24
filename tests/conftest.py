import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def pytest_configure(config):
    """Runs before test modules import config.py, so the service binds to SQLite."""
    os.environ.setdefault("DATABASE_URL", "sqlite://")
    os.environ.setdefault("HISTORY_SOURCE", "sql")


@pytest.fixture
def make_product():
    from forecasting.records import Product

    def _make(**overrides):
        fields = {
            "id": "p1",
            "sku": "SKU-001",
            "name": "Widget",
            "category": "Hardware",
            "unit_cost": 12.5,
            "lead_time_days": 7,
            "reorder_point": 50,
            "safety_stock": 20,
        }
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def make_inventory():
    from forecasting.records import InventorySnapshot

    def _make(available, product_id="p1", warehouse_id="w1"):
        return InventorySnapshot(
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=available,
            reserved_quantity=0,
            available_quantity=available,
        )

    return _make
