import uuid
from datetime import datetime

from sqlalchemy import (
    Column, String, Numeric, Integer, Date, TIMESTAMP, Boolean, JSON, Index
)
from sqlalchemy.orm import declarative_base

from utils.ai_config import MODEL_VERSION

Base = declarative_base()


# 1) Demand Forecast
class DemandForecast(Base):
    __tablename__ = "demand_forecasts"
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(String(64), nullable=False, index=True)
    days_ahead = Column(Integer, nullable=False)
    predicted_demand = Column(Integer, nullable=False)
    confidence_score = Column(Integer, nullable=False)
    recommended_order_qty = Column(Integer, nullable=False)
    seasonality_factor = Column(Numeric(6, 3), nullable=False)
    reasoning = Column(String(500), nullable=False)
    model_version = Column(String(50), default=MODEL_VERSION)
    generated_at = Column(TIMESTAMP, default=datetime.utcnow)


# 2) Stock Alerts
class StockAlert(Base):
    __tablename__ = "alerts"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    type = Column(String(50), nullable=False)
    severity = Column(String(20), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(String(500), nullable=False)
    action_recommended = Column(String(500))

    product_id = Column(String(64), nullable=False)
    warehouse_id = Column(String(64))
    alert_metadata = Column("metadata", JSON)

    is_resolved = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_alerts_open", "type", "product_id", "is_resolved"),
    )


# 3) Daily demand observations
class DemandHistory(Base):
    __tablename__ = "demand_history"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(String(64), nullable=False, index=True)
    warehouse_id = Column(String(64))
    demand_date = Column(Date, nullable=False)
    quantity = Column(Numeric(14, 3), nullable=False)
