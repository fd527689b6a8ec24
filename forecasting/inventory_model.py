from forecasting.records import InventorySnapshot, Product, StockAnalysis, StockStatus
from utils.ai_config import EMERGENCY_ORDER_MULTIPLIER, OVERSTOCK_MULTIPLIER
from utils.math_utils import format_number


def analyze_stock_level(inventory: InventorySnapshot, product: Product) -> StockAnalysis:
    """
    Classifies one snapshot against the product's thresholds. Rules are
    checked in order and the first match wins, so low stock always beats
    overstock when reorder_point is degenerate.
    """
    available = inventory.available_quantity
    reorder_point = product.reorder_point
    safety_stock = product.safety_stock
    qty = format_number(available)

    if available <= safety_stock:
        return StockAnalysis(
            status=StockStatus.CRITICAL,
            message=f"Critical low stock: {qty} units (Safety: {format_number(safety_stock)})",
            recommendation=f"Expedite emergency order for "
                           f"{format_number(reorder_point * EMERGENCY_ORDER_MULTIPLIER)} units",
            alert_type="critical_stock",
        )

    if available <= reorder_point:
        return StockAnalysis(
            status=StockStatus.WARNING,
            message=f"Below reorder point: {qty} units",
            recommendation=f"Place regular order for {format_number(reorder_point)} units",
            alert_type="low_stock",
        )

    if available > reorder_point * OVERSTOCK_MULTIPLIER:
        return StockAnalysis(
            status=StockStatus.WARNING,
            message=f"Overstock detected: {qty} units",
            recommendation="Consider redistribution or promotional pricing",
            alert_type="overstock",
        )

    return StockAnalysis(
        status=StockStatus.HEALTHY,
        message=f"Stock level optimal: {qty} units",
        recommendation="Continue monitoring",
    )
