import numpy as np

from forecasting.validation import as_demand_array, require_non_zero_mean


def calculate_variance(series) -> float:
    """Coefficient of variation: population std / mean."""
    values = as_demand_array(series)
    require_non_zero_mean(values)

    mean = float(np.mean(values))
    std = float(np.std(values, ddof=0))
    return std / mean
