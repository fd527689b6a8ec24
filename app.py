import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config import config
from db.connection import engine, SessionLocal
from db.models import Base, DemandForecast, StockAlert
from forecasting.alert_model import generate_predictive_alerts
from forecasting.exceptions import EngineError, InvalidInputError, UnknownScenarioError
from forecasting.forecast_model import generate_forecast, forecast_products
from forecasting.history import build_history_source
from forecasting.inventory_model import analyze_stock_level
from forecasting.records import ForecastSummary, InventorySnapshot, Product
from forecasting.reorder_model import generate_reorder_suggestions, prioritize_suggestions
from forecasting.scenario_model import simulate_scenario
from utils.ai_config import DEFAULT_FORECAST_DAYS, HISTORY_WINDOW_DAYS, MODEL_VERSION

# ✅ Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)
logger = logging.getLogger("ScmAI")

app = Flask(__name__)
CORS(app)

# ✅ Database initialization and health check
try:
    Base.metadata.create_all(bind=engine)
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("✅ Database connection established successfully.")
except SQLAlchemyError as e:
    logger.error(f"❌ Database connection failed: {e}")
else:
    logger.info("✅ Forecast, alert and demand history tables ensured in database.")

logger.info("🚀 ScmAI Flask service initialized successfully.")


def _history_source():
    return build_history_source(config.HISTORY_SOURCE, bind=engine, seed=config.HISTORY_SEED)


def _records(data, key, factory):
    rows = data.get(key) or []
    if not isinstance(rows, list):
        raise InvalidInputError(f"{key} must be a list")
    return [factory(r) for r in rows]


def _int(data, key, default):
    try:
        return int(data.get(key, default))
    except (TypeError, ValueError):
        raise InvalidInputError(f"{key} must be an integer") from None


def _mapping(data, key):
    value = data.get(key)
    if not isinstance(value, dict):
        raise InvalidInputError(f"{key} is required")
    return value


@app.errorhandler(UnknownScenarioError)
def handle_unknown_scenario(e):
    logger.error(f"❌ Scenario simulation rejected: {e}")
    return jsonify({"status": "error", "message": str(e)}), 400


@app.errorhandler(EngineError)
def handle_engine_error(e):
    logger.warning(f"Invalid engine input on {request.path}: {e}")
    return jsonify({"status": "error", "message": str(e)}), 400


@app.route("/api/v1/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "model_version": MODEL_VERSION})


@app.route("/api/v1/forecast", methods=["POST"])
def forecast():
    """
    Body:
    {
      "product": {"id": "p1", "sku": "SKU-1", "name": "Widget", "reorder_point": 50, "safety_stock": 20},
      "history": [100, 98, ...],   # optional; read from the configured history source if missing
      "days_ahead": 30             # optional (default 30)
    }
    """
    data = request.get_json() or {}
    product = Product.from_record(_mapping(data, "product"))
    days_ahead = _int(data, "days_ahead", DEFAULT_FORECAST_DAYS)

    history = data.get("history")
    if history is None:
        history = _history_source().get_series(product, HISTORY_WINDOW_DAYS)

    result = generate_forecast(product, history, days_ahead)

    db = SessionLocal()
    try:
        db.add(DemandForecast(days_ahead=days_ahead, **result.to_dict()))
        db.commit()
        return jsonify({"status": "success", "forecast": result.to_dict()})
    except Exception as e:
        db.rollback()
        return jsonify({"status": "error", "message": str(e)}), 500
    finally:
        db.close()


@app.route("/api/v1/forecast/<product_id>", methods=["GET"])
def get_forecasts(product_id):
    db = SessionLocal()
    try:
        rows = (
            db.query(DemandForecast)
            .filter_by(product_id=product_id)
            .order_by(DemandForecast.generated_at.desc())
            .all()
        )
        return jsonify([
            {
                "product_id": r.product_id,
                "days_ahead": r.days_ahead,
                "predicted_demand": r.predicted_demand,
                "confidence_score": r.confidence_score,
                "recommended_order_qty": r.recommended_order_qty,
                "seasonality_factor": float(r.seasonality_factor),
                "reasoning": r.reasoning,
                "model_version": r.model_version,
                "generated_at": r.generated_at.strftime("%Y-%m-%d %H:%M:%S")
            } for r in rows
        ])
    finally:
        db.close()


@app.route("/api/v1/stock/analyze", methods=["POST"])
def analyze_stock():
    """
    Body:
    {
      "inventory": {"product_id": "p1", "warehouse_id": "w1", "quantity": 40, "reserved_quantity": 30},
      "product": {"id": "p1", "reorder_point": 50, "safety_stock": 20}
    }
    """
    data = request.get_json() or {}
    inventory = InventorySnapshot.from_record(_mapping(data, "inventory"))
    product = Product.from_record(_mapping(data, "product"))

    analysis = analyze_stock_level(inventory, product)
    return jsonify({"status": "success", "product_id": product.id, **analysis.to_dict()})


@app.route("/api/v1/alerts/generate", methods=["POST"])
def generate_alerts():
    """
    Body:
    {
      "items": [
        {"inventory": {...}, "product": {...}},
        ...
      ]
    }
    Alerts already open for the same product and type are not raised again.
    """
    data = request.get_json() or {}
    items = _records(
        data, "items",
        lambda r: (InventorySnapshot.from_record(_mapping(r, "inventory")),
                   Product.from_record(_mapping(r, "product"))),
    )

    db = SessionLocal()
    try:
        open_alerts = db.query(StockAlert.type, StockAlert.product_id).filter_by(is_resolved=False).all()
        alerts = generate_predictive_alerts(items, open_alerts=[tuple(a) for a in open_alerts])

        if not alerts:
            return jsonify({"status": "ok", "count": 0, "message": "No new stock alerts"}), 200

        db.add_all([
            StockAlert(
                type=a["type"],
                severity=a["severity"],
                title=a["title"],
                message=a["message"],
                action_recommended=a["action_recommended"],
                product_id=a["product_id"],
                warehouse_id=a["warehouse_id"],
                alert_metadata=a["metadata"],
                is_resolved=a["is_resolved"],
            ) for a in alerts
        ])
        db.commit()
        logger.info(f"Raised {len(alerts)} stock alert(s)")
        return jsonify({"status": "success", "count": len(alerts), "alerts": alerts})
    except SQLAlchemyError as e:
        db.rollback()
        return jsonify({"status": "error", "message": str(e)}), 500
    finally:
        db.close()


@app.route("/api/v1/alerts", methods=["GET"])
def get_alerts():
    db = SessionLocal()
    try:
        rows = (
            db.query(StockAlert)
            .filter_by(is_resolved=False)
            .order_by(StockAlert.created_at.desc())
            .all()
        )
        return jsonify([
            {
                "id": r.id,
                "type": r.type,
                "severity": r.severity,
                "title": r.title,
                "message": r.message,
                "action_recommended": r.action_recommended,
                "product_id": r.product_id,
                "warehouse_id": r.warehouse_id,
                "metadata": r.alert_metadata,
                "created_at": r.created_at.isoformat()
            } for r in rows
        ])
    finally:
        db.close()


@app.route("/api/v1/scenarios/simulate", methods=["POST"])
def simulate():
    """
    Body:
    {
      "scenario_type": "demand_spike" | "supply_delay" | "route_disruption",
      "parameters": {"spikePercentage": 50, "affectedCategories": ["Electronics"]}
    }
    """
    data = request.get_json() or {}
    scenario_type = data.get("scenario_type")
    if not scenario_type:
        return jsonify({"status": "error", "message": "scenario_type is required"}), 400

    result = simulate_scenario(scenario_type, data.get("parameters") or {})
    return jsonify({"status": "success", "scenario_type": scenario_type, "result": result.to_dict()})


@app.route("/api/v1/reorders", methods=["POST"])
def compute_reorders():
    """
    Body:
    {
      "inventory": [{"product_id": "p1", "available_quantity": 5}, ...],
      "products": [{"id": "p1", "reorder_point": 50}, ...],
      "forecasts": [{"product_id": "p1", "predicted_demand": 60, "recommended_order_qty": 80}],
                                    # optional; generated from the history source if missing
      "limit": 5                    # optional; most urgent first when given
    }
    """
    data = request.get_json() or {}
    products = _records(data, "products", Product.from_record)
    inventory = _records(data, "inventory", InventorySnapshot.from_record)

    skipped = []
    if data.get("forecasts") is None:
        results, skipped = forecast_products(products, _history_source())
        forecasts = [ForecastSummary.from_record(r) for r in results]
    else:
        forecasts = _records(data, "forecasts", ForecastSummary.from_record)

    suggestions = generate_reorder_suggestions(inventory, products, forecasts)

    limit = data.get("limit")
    if limit is not None:
        suggestions = prioritize_suggestions(suggestions, _int(data, "limit", None))

    return jsonify({
        "status": "success",
        "count": len(suggestions),
        "suggestions": [s.to_dict() for s in suggestions],
        "skipped": skipped,
    })


if __name__ == "__main__":
    app.run(host=config.FLASK_HOST, port=config.FLASK_PORT)
