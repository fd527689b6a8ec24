from collections.abc import Mapping

import numpy as np

from forecasting.exceptions import InvalidInputError


def as_demand_array(series) -> np.ndarray:
    """
    Converts a historical demand series into a float array, oldest first.
    Raises InvalidInputError on non-numeric (strings, booleans included),
    non-finite or negative entries.
    """
    if isinstance(series, (str, bytes, Mapping)):
        raise InvalidInputError("historical series must be a sequence of numbers")

    try:
        values = np.asarray(list(series))
    except (TypeError, ValueError):
        raise InvalidInputError("historical series must contain only numbers") from None

    if values.ndim != 1:
        raise InvalidInputError("historical series must be one-dimensional")
    if values.size and values.dtype.kind not in "iuf":
        raise InvalidInputError("historical series must contain only numbers")

    values = values.astype(float)
    if not np.all(np.isfinite(values)):
        raise InvalidInputError("historical series contains non-finite values")
    if np.any(values < 0):
        raise InvalidInputError("historical series contains negative demand")
    return values


def require_non_empty(values: np.ndarray):
    if values.size == 0:
        raise InvalidInputError("historical series is empty; cannot compute a forecast")


def require_non_zero_mean(values: np.ndarray):
    require_non_empty(values)
    if float(np.mean(values)) == 0.0:
        raise InvalidInputError("historical series has zero mean; cannot compute variance")
