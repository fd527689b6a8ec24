import itertools

import pytest

from forecasting.alert_model import generate_predictive_alerts
from forecasting.inventory_model import analyze_stock_level
from forecasting.records import StockStatus


def test_critical_when_at_or_below_safety_stock(make_product, make_inventory):
    analysis = analyze_stock_level(make_inventory(10), make_product())

    assert analysis.status is StockStatus.CRITICAL
    assert analysis.message == "Critical low stock: 10 units (Safety: 20)"
    assert analysis.recommendation == "Expedite emergency order for 100 units"
    assert analysis.alert_type == "critical_stock"


@pytest.mark.parametrize(
    "available, status, alert_type",
    [
        (20, StockStatus.CRITICAL, "critical_stock"),
        (21, StockStatus.WARNING, "low_stock"),
        (50, StockStatus.WARNING, "low_stock"),
        (51, StockStatus.HEALTHY, None),
        (150, StockStatus.HEALTHY, None),
        (151, StockStatus.WARNING, "overstock"),
    ],
)
def test_threshold_boundaries(make_product, make_inventory, available, status, alert_type):
    analysis = analyze_stock_level(make_inventory(available), make_product())
    assert analysis.status is status
    assert analysis.alert_type == alert_type


def test_below_reorder_point_recommends_regular_order(make_product, make_inventory):
    analysis = analyze_stock_level(make_inventory(30), make_product())
    assert analysis.message == "Below reorder point: 30 units"
    assert analysis.recommendation == "Place regular order for 50 units"


def test_overstock_recommendation(make_product, make_inventory):
    analysis = analyze_stock_level(make_inventory(400), make_product())
    assert analysis.message == "Overstock detected: 400 units"
    assert analysis.recommendation == "Consider redistribution or promotional pricing"


def test_healthy_stock(make_product, make_inventory):
    analysis = analyze_stock_level(make_inventory(100), make_product())
    assert analysis.message == "Stock level optimal: 100 units"
    assert analysis.recommendation == "Continue monitoring"
    assert not analysis.needs_alert


def test_zero_reorder_point_prefers_critical(make_product, make_inventory):
    product = make_product(reorder_point=0, safety_stock=0)
    assert analyze_stock_level(make_inventory(0), product).status is StockStatus.CRITICAL
    assert analyze_stock_level(make_inventory(5), product).alert_type == "overstock"


def test_classification_is_exhaustive(make_product, make_inventory):
    grid = itertools.product(range(0, 200, 7), range(0, 80, 9), range(0, 60, 11))
    for available, reorder_point, safety_stock in grid:
        product = make_product(reorder_point=reorder_point, safety_stock=safety_stock)
        analysis = analyze_stock_level(make_inventory(available), product)

        assert analysis.status in set(StockStatus)
        if available <= safety_stock:
            assert analysis.status is StockStatus.CRITICAL


def test_alerts_only_for_critical_and_warning(make_product, make_inventory):
    items = [
        (make_inventory(10, product_id="a"), make_product(id="a", name="Bolts", sku="B-1")),
        (make_inventory(100, product_id="b"), make_product(id="b", name="Nuts")),
        (make_inventory(40, product_id="c"), make_product(id="c", name="Screws")),
    ]

    alerts = generate_predictive_alerts(items)

    assert [a["type"] for a in alerts] == ["critical_stock", "low_stock"]
    critical = alerts[0]
    assert critical["severity"] == "critical"
    assert critical["title"] == "Critical Stock Alert: Bolts"
    assert critical["action_recommended"] == "Expedite emergency order for 100 units"
    assert critical["metadata"] == {"product_id": "a", "sku": "B-1"}
    assert critical["warehouse_id"] == "w1"
    assert critical["is_resolved"] is False
    assert alerts[1]["title"] == "Low Stock Alert: Screws"


def test_alerts_skip_already_open(make_product, make_inventory):
    items = [
        (make_inventory(10, product_id="a"), make_product(id="a")),
        (make_inventory(10, product_id="b"), make_product(id="b")),
    ]

    alerts = generate_predictive_alerts(items, open_alerts=[("critical_stock", "a"), ("low_stock", "b")])

    assert [a["product_id"] for a in alerts] == ["b"]


def test_alerts_deduplicate_within_run(make_product, make_inventory):
    product = make_product(id="a")
    items = [
        (make_inventory(10, product_id="a", warehouse_id="w1"), product),
        (make_inventory(5, product_id="a", warehouse_id="w2"), product),
    ]

    alerts = generate_predictive_alerts(items)

    assert len(alerts) == 1
    assert alerts[0]["warehouse_id"] == "w1"


def test_overstock_alert_title(make_product, make_inventory):
    alerts = generate_predictive_alerts([(make_inventory(500), make_product(name="Gears"))])
    assert alerts[0]["type"] == "overstock"
    assert alerts[0]["severity"] == "warning"
    assert alerts[0]["title"] == "Overstock Alert: Gears"
