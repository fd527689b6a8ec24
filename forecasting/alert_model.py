from forecasting.inventory_model import analyze_stock_level

ALERT_TITLES = {
    "critical_stock": "Critical Stock Alert",
    "low_stock": "Low Stock Alert",
    "overstock": "Overstock Alert",
}


def generate_predictive_alerts(items, open_alerts=()):
    """
    Builds alert rows for every (InventorySnapshot, Product) pair whose stock
    is critical or in warning.

    `open_alerts` holds (alert_type, product_id) pairs of unresolved alerts
    already stored; those, and repeats within this run, are not raised again.
    """
    seen = {(alert_type, str(product_id)) for alert_type, product_id in open_alerts}

    alerts = []
    for inventory, product in items:
        analysis = analyze_stock_level(inventory, product)
        if not analysis.needs_alert:
            continue

        key = (analysis.alert_type, product.id)
        if key in seen:
            continue
        seen.add(key)

        alerts.append({
            "type": analysis.alert_type,
            "severity": analysis.status.value,
            "title": f"{ALERT_TITLES[analysis.alert_type]}: {product.name}",
            "message": analysis.message,
            "action_recommended": analysis.recommendation,
            "product_id": product.id,
            "warehouse_id": inventory.warehouse_id,
            "metadata": {"product_id": product.id, "sku": product.sku},
            "is_resolved": False,
        })

    return alerts
