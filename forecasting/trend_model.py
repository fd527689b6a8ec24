import numpy as np

from forecasting.exceptions import InvalidInputError
from forecasting.validation import as_demand_array
from utils.ai_config import TREND_WINDOW_DAYS


def calculate_trend(series, window: int = TREND_WINDOW_DAYS) -> float:
    """
    Relative change between the mean of the last `window` observations and the
    mean of the first `window` observations: (recent - older) / older.

    A series with fewer than 2 points is treated as flat (0.0). Otherwise the
    series must hold at least two full windows, and the leading window must
    have non-zero demand.
    """
    if window < 1:
        raise InvalidInputError(f"trend window must be at least 1 day, got {window}")

    values = as_demand_array(series)
    if values.size < 2:
        return 0.0
    if values.size < 2 * window:
        raise InvalidInputError(
            f"trend needs at least {2 * window} observations for a {window}-day window, "
            f"got {values.size}"
        )

    recent_avg = float(np.mean(values[-window:]))
    older_avg = float(np.mean(values[:window]))
    if older_avg == 0.0:
        raise InvalidInputError(
            f"leading {window}-day window has zero mean demand; cannot compute trend"
        )

    return (recent_avg - older_avg) / older_avg
