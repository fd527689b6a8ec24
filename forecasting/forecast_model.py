import logging

import numpy as np

from forecasting.exceptions import EngineError
from forecasting.records import ForecastResult, Product
from forecasting.seasonality_model import detect_seasonality
from forecasting.trend_model import calculate_trend
from forecasting.validation import as_demand_array, require_non_zero_mean
from forecasting.variance_model import calculate_variance
from utils.ai_config import (
    CONFIDENCE_BASE, CONFIDENCE_CEILING, CONFIDENCE_FLOOR, CONFIDENCE_VARIANCE_WEIGHT,
    DEFAULT_FORECAST_DAYS, HIGH_VARIANCE_THRESHOLD, HISTORY_WINDOW_DAYS, LOW_VARIANCE_THRESHOLD,
    SEASONAL_NOTE_THRESHOLD, TREND_DOWN_THRESHOLD, TREND_UP_THRESHOLD, TREND_WINDOW_DAYS,
)
from utils.math_utils import clamp, round_half_up

logger = logging.getLogger(__name__)


def build_reasoning(trend: float, seasonality: float, variance: float) -> str:
    parts = []

    if trend > TREND_UP_THRESHOLD:
        parts.append("Strong upward trend detected")
    elif trend < TREND_DOWN_THRESHOLD:
        parts.append("Declining demand pattern")
    else:
        parts.append("Stable demand pattern")

    if seasonality > SEASONAL_NOTE_THRESHOLD:
        parts.append("seasonal peak period")

    if variance < LOW_VARIANCE_THRESHOLD:
        parts.append("high prediction confidence")
    elif variance > HIGH_VARIANCE_THRESHOLD:
        parts.append("moderate volatility in historical data")

    return ", ".join(parts)


def generate_forecast(
        product: Product,
        history,
        days_ahead: int = DEFAULT_FORECAST_DAYS,
        trend_window: int = TREND_WINDOW_DAYS,
) -> ForecastResult:
    """
    Heuristic demand forecast for one product.

    predicted = avg * (1 + trend) * seasonality, confidence is derived from the
    coefficient of variation and clamped to [60, 95], and the recommended order
    never drops below the product's reorder point.
    Raises InvalidInputError for an empty, negative or zero-mean history.
    """
    values = as_demand_array(history)
    require_non_zero_mean(values)

    avg_demand = float(np.mean(values))
    trend = calculate_trend(values, window=trend_window)
    seasonality = detect_seasonality(days_ahead)

    predicted_demand = max(0, round_half_up(avg_demand * (1 + trend) * seasonality))

    variance = calculate_variance(values)
    confidence = clamp(CONFIDENCE_BASE - variance * CONFIDENCE_VARIANCE_WEIGHT,
                       CONFIDENCE_FLOOR, CONFIDENCE_CEILING)

    recommended_order_qty = max(product.reorder_point, predicted_demand + product.safety_stock)

    logger.debug(
        "forecast product=%s avg=%.3f trend=%.3f seasonality=%.2f cv=%.3f -> %s",
        product.id, avg_demand, trend, seasonality, variance, predicted_demand,
    )

    return ForecastResult(
        product_id=product.id,
        predicted_demand=predicted_demand,
        confidence_score=round_half_up(confidence),
        recommended_order_qty=recommended_order_qty,
        seasonality_factor=seasonality,
        reasoning=build_reasoning(trend, seasonality, variance),
    )


def forecast_products(
        products,
        history_source,
        days_ahead: int = DEFAULT_FORECAST_DAYS,
        history_days: int = HISTORY_WINDOW_DAYS,
):
    """
    Forecasts every product using series pulled from `history_source`.
    Returns (forecasts, skipped) where skipped is a list of
    {"product_id", "reason"} for products whose history failed validation.
    """
    forecasts = []
    skipped = []
    for product in products:
        series = history_source.get_series(product, history_days)
        try:
            forecasts.append(generate_forecast(product, series, days_ahead))
        except EngineError as e:
            logger.warning("Skipping forecast for product %s: %s", product.id, e)
            skipped.append({"product_id": product.id, "reason": str(e)})
    return forecasts, skipped
