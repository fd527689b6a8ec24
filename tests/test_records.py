import pytest

from forecasting.exceptions import InvalidInputError
from forecasting.records import ForecastResult, ForecastSummary, InventorySnapshot, Product


def test_product_defaults_safety_stock_from_reorder_point():
    product = Product.from_record({"id": 7, "sku": "SKU-7", "name": "Crate", "reorder_point": 55})

    assert product.id == "7"
    assert product.safety_stock == 16  # floor(55 * 0.3)


def test_product_keeps_explicit_safety_stock():
    product = Product.from_record({"id": "p1", "reorder_point": 50, "safety_stock": 20})
    assert product.safety_stock == 20


def test_product_requires_id():
    with pytest.raises(InvalidInputError):
        Product.from_record({"sku": "x"})


def test_product_rejects_non_numeric_thresholds():
    with pytest.raises(InvalidInputError, match="reorder_point"):
        Product.from_record({"id": "p1", "reorder_point": "many"})


def test_inventory_derives_available_quantity():
    snapshot = InventorySnapshot.from_record({"product_id": "p1", "quantity": 40, "reserved_quantity": 30})
    assert snapshot.available_quantity == 10


def test_inventory_takes_available_quantity_as_given():
    snapshot = InventorySnapshot.from_record(
        {"product_id": "p1", "quantity": 40, "reserved_quantity": 30, "available_quantity": 25}
    )
    assert snapshot.available_quantity == 25


def test_forecast_summary_from_result_and_row():
    result = ForecastResult("p1", 100, 95, 120, 1.0, "Stable demand pattern")
    assert ForecastSummary.from_record(result) == ForecastSummary("p1", 100, 120)

    row = {"product_id": "p2", "predicted_demand": "60", "recommended_order_qty": 80.0}
    assert ForecastSummary.from_record(row) == ForecastSummary("p2", 60, 80)
