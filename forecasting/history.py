"""
Historical demand sources.

The forecaster never fetches data itself: callers pick a source and pass the
series in. Every source returns one observation per day, oldest first.
"""
from typing import Mapping, Protocol, Sequence

import numpy as np
import pandas as pd
from sqlalchemy import text

from forecasting.exceptions import InvalidInputError
from forecasting.records import Product
from utils.ai_config import HISTORY_WINDOW_DAYS, SYNTHETIC_BASE_RATIO, SYNTHETIC_SPREAD


class DemandHistorySource(Protocol):
    def get_series(self, product: Product, days: int = HISTORY_WINDOW_DAYS) -> list[float]:
        ...


class InMemoryDemandHistory:
    """Series supplied up front, keyed by product id."""

    def __init__(self, series_by_product: Mapping[str, Sequence[float]]):
        self._series = {str(k): [float(v) for v in s] for k, s in series_by_product.items()}

    def get_series(self, product: Product, days: int = HISTORY_WINDOW_DAYS) -> list[float]:
        if days <= 0:
            return []
        return list(self._series.get(product.id, []))[-days:]


class SyntheticDemandHistory:
    """
    Fabricated history: floor(U[0, 1) * spread) + reorder_point * base_ratio.
    Useful for demos and for products that have no sales yet. The generator is
    per instance, so a fixed seed gives a reproducible sequence.
    """

    def __init__(self, seed: int | None = None, spread: int = SYNTHETIC_SPREAD,
                 base_ratio: float = SYNTHETIC_BASE_RATIO):
        self._rng = np.random.default_rng(seed)
        self.spread = spread
        self.base_ratio = base_ratio

    def get_series(self, product: Product, days: int = HISTORY_WINDOW_DAYS) -> list[float]:
        if days <= 0:
            return []
        base = product.reorder_point * self.base_ratio
        noise = np.floor(self._rng.random(days) * self.spread)
        return (noise + base).tolist()


class SqlDemandHistory:
    """Daily demand read from the demand_history table."""

    QUERY = text("""
                 SELECT demand_date, SUM(quantity) AS qty
                 FROM demand_history
                 WHERE product_id = :product_id
                 GROUP BY demand_date
                 ORDER BY demand_date
                 """)

    def __init__(self, bind):
        self.bind = bind

    def get_series(self, product: Product, days: int = HISTORY_WINDOW_DAYS) -> list[float]:
        if days <= 0:
            return []
        df = pd.read_sql(self.QUERY, self.bind, params={"product_id": product.id})
        if df.empty:
            return []

        df["demand_date"] = pd.to_datetime(df["demand_date"]).dt.normalize()
        daily = df.groupby("demand_date")["qty"].sum().astype(float)

        # Contiguous window ending at the latest observation, never reaching back
        # before the first one; missing days in between had no demand
        start = max(daily.index.min(), daily.index.max() - pd.Timedelta(days=days - 1))
        window = pd.date_range(start=start, end=daily.index.max(), freq="D")
        daily = daily.reindex(window, fill_value=0.0).clip(lower=0.0)
        return daily.tolist()


def build_history_source(name: str, bind=None, seed: int | None = None) -> DemandHistorySource:
    if name == "sql":
        if bind is None:
            raise InvalidInputError("sql history source needs a database bind")
        return SqlDemandHistory(bind)
    if name == "synthetic":
        return SyntheticDemandHistory(seed=seed)
    raise InvalidInputError(f"Unknown history source: {name!r}")
