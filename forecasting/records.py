"""
Value records exchanged between the engine and its host.

Records are frozen: the engine never mutates its inputs and every call returns
fresh results. ``from_record`` accepts the dict rows the host fetches from
storage (or receives as JSON); ``to_dict`` produces JSON-ready output.
"""
import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Mapping

from forecasting.exceptions import InvalidInputError
from utils.ai_config import DEFAULT_SAFETY_STOCK_RATIO


class StockStatus(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    HEALTHY = "healthy"


class Urgency(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ScenarioType(str, Enum):
    DEMAND_SPIKE = "demand_spike"
    SUPPLY_DELAY = "supply_delay"
    ROUTE_DISRUPTION = "route_disruption"


def _number(value, name: str, default=None):
    if value is None:
        if default is None:
            raise InvalidInputError(f"{name} is required")
        return default
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be numeric, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be finite, got {value!r}")
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class Product:
    id: str
    sku: str
    name: str
    category: str = ""
    unit_cost: float | None = None
    lead_time_days: int | None = None
    reorder_point: int = 0
    safety_stock: int = 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Product":
        if record.get("id") is None:
            raise InvalidInputError("product id is required")
        reorder_point = _number(record.get("reorder_point"), "reorder_point", default=0)
        safety_stock = record.get("safety_stock")
        if safety_stock is None:
            safety_stock = math.floor(reorder_point * DEFAULT_SAFETY_STOCK_RATIO)
        return cls(
            id=str(record["id"]),
            sku=str(record.get("sku") or ""),
            name=str(record.get("name") or ""),
            category=str(record.get("category") or ""),
            unit_cost=record.get("unit_cost"),
            lead_time_days=record.get("lead_time_days"),
            reorder_point=reorder_point,
            safety_stock=_number(safety_stock, "safety_stock"),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class InventorySnapshot:
    product_id: str
    warehouse_id: str | None = None
    quantity: float = 0
    reserved_quantity: float = 0
    available_quantity: float = 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "InventorySnapshot":
        if record.get("product_id") is None:
            raise InvalidInputError("inventory product_id is required")
        quantity = _number(record.get("quantity"), "quantity", default=0)
        reserved = _number(record.get("reserved_quantity"), "reserved_quantity", default=0)
        available = record.get("available_quantity")
        available = quantity - reserved if available is None else _number(available, "available_quantity")
        warehouse_id = record.get("warehouse_id")
        return cls(
            product_id=str(record["product_id"]),
            warehouse_id=None if warehouse_id is None else str(warehouse_id),
            quantity=quantity,
            reserved_quantity=reserved,
            available_quantity=available,
        )


@dataclass(frozen=True)
class ForecastResult:
    product_id: str
    predicted_demand: int
    confidence_score: int
    recommended_order_qty: int
    seasonality_factor: float
    reasoning: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ForecastSummary:
    """The part of a prior forecast the reorder advisor needs."""

    product_id: str
    predicted_demand: float
    recommended_order_qty: float

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ForecastSummary":
        if isinstance(record, ForecastResult):
            return cls(record.product_id, record.predicted_demand, record.recommended_order_qty)
        if record.get("product_id") is None:
            raise InvalidInputError("forecast product_id is required")
        return cls(
            product_id=str(record["product_id"]),
            predicted_demand=_number(record.get("predicted_demand"), "predicted_demand"),
            recommended_order_qty=_number(record.get("recommended_order_qty"), "recommended_order_qty"),
        )


@dataclass(frozen=True)
class StockAnalysis:
    status: StockStatus
    message: str
    recommendation: str
    alert_type: str | None = None

    @property
    def needs_alert(self) -> bool:
        return self.status in (StockStatus.CRITICAL, StockStatus.WARNING)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "message": self.message,
            "recommendation": self.recommendation,
            "alert_type": self.alert_type,
        }


@dataclass(frozen=True)
class ScenarioResult:
    impact: str
    affected_products: tuple = field(default_factory=tuple)
    recommended_actions: tuple = field(default_factory=tuple)
    estimated_cost_impact: float = 0
    timeline_adjustment: int = 0

    def to_dict(self) -> dict:
        return {
            "impact": self.impact,
            "affected_products": list(self.affected_products),
            "recommended_actions": list(self.recommended_actions),
            "estimated_cost_impact": self.estimated_cost_impact,
            "timeline_adjustment": self.timeline_adjustment,
        }


@dataclass(frozen=True)
class ReorderSuggestion:
    product: Product
    current_stock: float
    forecasted_demand: float
    suggested_order_qty: float
    urgency: Urgency
    days_of_stock: float
    reasoning: str

    def to_dict(self) -> dict:
        return {
            "product": self.product.to_dict(),
            "current_stock": self.current_stock,
            "forecasted_demand": self.forecasted_demand,
            "suggested_order_qty": self.suggested_order_qty,
            "urgency": self.urgency.value,
            # JSON has no infinity
            "days_of_stock": None if math.isinf(self.days_of_stock) else round(self.days_of_stock, 2),
            "reasoning": self.reasoning,
        }
