import math

import pandas as pd

from forecasting.exceptions import InvalidInputError
from forecasting.records import ForecastSummary, InventorySnapshot, Product, ReorderSuggestion, Urgency
from utils.ai_config import DAYS_PER_MONTH, HIGH_URGENCY_DAYS, MEDIUM_URGENCY_DAYS
from utils.math_utils import round_half_up

URGENCY_RANK = {Urgency.HIGH: 0, Urgency.MEDIUM: 1, Urgency.LOW: 2}


def _days_of_stock(available: float, predicted_demand: float) -> float:
    # No expected consumption means the stock never runs out
    if predicted_demand <= 0:
        return math.inf
    return max(0.0, available) / (predicted_demand / DAYS_PER_MONTH)


def _urgency(days_of_stock: float) -> Urgency:
    if days_of_stock < HIGH_URGENCY_DAYS:
        return Urgency.HIGH
    if days_of_stock < MEDIUM_URGENCY_DAYS:
        return Urgency.MEDIUM
    return Urgency.LOW


def generate_reorder_suggestions(
        inventory: list[InventorySnapshot],
        products: list[Product],
        forecasts: list[ForecastSummary],
) -> list[ReorderSuggestion]:
    """
    Reorder suggestions for products expected to run out within two weeks.

    Missing data degrades to defaults instead of failing:
      - no inventory snapshot -> 0 units available
      - no forecast -> predicted demand and order qty fall back to reorder_point
    Only high and medium urgency suggestions are returned, in product order.
    """
    if not products:
        return []

    # ---------------------------------------------------------
    # 1) Products, in input order
    # ---------------------------------------------------------
    base = pd.DataFrame({
        "product_id": [p.id for p in products],
        "reorder_point": [float(p.reorder_point) for p in products],
    })

    # ---------------------------------------------------------
    # 2) First snapshot / forecast per product
    # ---------------------------------------------------------
    stock_df = pd.DataFrame(
        [(i.product_id, float(i.available_quantity)) for i in inventory],
        columns=["product_id", "available_quantity"],
    ).drop_duplicates("product_id", keep="first")

    forecast_df = pd.DataFrame(
        [(f.product_id, float(f.predicted_demand), float(f.recommended_order_qty)) for f in forecasts],
        columns=["product_id", "predicted_demand", "recommended_order_qty"],
    ).drop_duplicates("product_id", keep="first")

    # ---------------------------------------------------------
    # 3) Merge with defaults for missing rows
    # ---------------------------------------------------------
    merged = (
        base.merge(stock_df, how="left", on="product_id")
        .merge(forecast_df, how="left", on="product_id")
    )
    merged["available_quantity"] = merged["available_quantity"].fillna(0.0)
    merged["predicted_demand"] = merged["predicted_demand"].fillna(merged["reorder_point"])
    merged["recommended_order_qty"] = merged["recommended_order_qty"].fillna(merged["reorder_point"])

    # ---------------------------------------------------------
    # 4) Classify and keep medium/high urgency
    # ---------------------------------------------------------
    suggestions = []
    for product, (_, r) in zip(products, merged.iterrows()):
        available = float(r["available_quantity"])
        predicted = float(r["predicted_demand"])
        days = _days_of_stock(available, predicted)
        urgency = _urgency(days)
        if urgency is Urgency.LOW:
            continue

        reasoning = f"{round_half_up(days)} days of stock remaining."
        if urgency is Urgency.HIGH:
            reasoning += " Immediate action required."

        suggestions.append(ReorderSuggestion(
            product=product,
            current_stock=_whole(available),
            forecasted_demand=_whole(predicted),
            suggested_order_qty=_whole(float(r["recommended_order_qty"])),
            urgency=urgency,
            days_of_stock=days,
            reasoning=reasoning,
        ))

    return suggestions


def _whole(value: float):
    return int(value) if value.is_integer() else value


def prioritize_suggestions(suggestions, limit: int | None = None):
    """Most urgent first, then fewest days of stock."""
    if limit is not None and limit < 0:
        raise InvalidInputError(f"limit must be non-negative, got {limit}")
    ranked = sorted(suggestions, key=lambda s: (URGENCY_RANK[s.urgency], s.days_of_stock))
    return ranked if limit is None else ranked[:limit]
