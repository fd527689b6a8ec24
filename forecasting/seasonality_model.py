from forecasting.exceptions import InvalidInputError
from utils.ai_config import DAYS_PER_YEAR, SEASONAL_PEAK_DAYS, SEASONAL_RADIUS_DAYS, SEASONAL_UPLIFT


def detect_seasonality(day_offset: int) -> float:
    """
    Fixed-calendar multiplier: SEASONAL_UPLIFT within SEASONAL_RADIUS_DAYS
    (exclusive) of a seasonal peak, 1.0 otherwise. Offsets wrap yearly.
    """
    if day_offset < 0:
        raise InvalidInputError(f"day offset must be non-negative, got {day_offset}")

    day_of_year = day_offset % DAYS_PER_YEAR
    near_peak = any(abs(day_of_year - peak) < SEASONAL_RADIUS_DAYS for peak in SEASONAL_PEAK_DAYS)
    return SEASONAL_UPLIFT if near_peak else 1.0
