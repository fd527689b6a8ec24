import pytest

from forecasting.exceptions import InvalidInputError
from forecasting.forecast_model import build_reasoning, forecast_products, generate_forecast
from forecasting.history import InMemoryDemandHistory


def test_flat_history_forecast(make_product):
    result = generate_forecast(make_product(), [100] * 30, days_ahead=30)

    assert result.product_id == "p1"
    assert result.predicted_demand == 100
    assert result.seasonality_factor == 1.0
    # zero variance gives 85 - 0 * 10, already inside [60, 95]
    assert result.confidence_score == 85
    assert result.recommended_order_qty == 120
    assert result.reasoning == "Stable demand pattern, high prediction confidence"


def test_seasonal_peak_lifts_prediction(make_product):
    result = generate_forecast(make_product(), [100] * 30, days_ahead=60)

    assert result.seasonality_factor == 1.2
    assert result.predicted_demand == 120
    assert result.recommended_order_qty == 140
    assert "seasonal peak period" in result.reasoning


def test_upward_trend(make_product):
    result = generate_forecast(make_product(), [100] * 15 + [120] * 15)

    # avg 110, trend +20%
    assert result.predicted_demand == 132
    assert result.confidence_score == 84
    assert result.reasoning == "Strong upward trend detected, high prediction confidence"


def test_declining_trend(make_product):
    result = generate_forecast(make_product(), [120] * 15 + [100] * 15)
    assert result.reasoning.startswith("Declining demand pattern")


def test_volatile_history_lowers_confidence(make_product):
    result = generate_forecast(make_product(), [20, 180] * 15)

    assert result.confidence_score == 77
    assert result.reasoning.endswith("moderate volatility in historical data")


def test_confidence_floor(make_product):
    result = generate_forecast(make_product(), [1] * 29 + [1000])
    assert result.confidence_score == 60


@pytest.mark.parametrize(
    "history",
    [
        [100] * 30,
        [20, 180] * 15,
        [1] * 29 + [1000],
        [5, 6, 7, 8, 9, 10, 11] * 4 + [3, 40],
        list(range(1, 31)),
    ],
)
def test_confidence_always_within_bounds(make_product, history):
    result = generate_forecast(make_product(), history)
    assert 60 <= result.confidence_score <= 95


def test_recommended_order_never_below_reorder_point(make_product):
    product = make_product(reorder_point=500, safety_stock=20)
    result = generate_forecast(product, [100] * 30)
    assert result.recommended_order_qty == 500


def test_prediction_is_never_negative(make_product):
    result = generate_forecast(make_product(), [100] * 23 + [0] * 7)
    assert result.predicted_demand == 0
    assert result.recommended_order_qty == 50


def test_empty_history_is_rejected(make_product):
    with pytest.raises(InvalidInputError, match="empty"):
        generate_forecast(make_product(), [])


def test_zero_mean_history_is_rejected(make_product):
    with pytest.raises(InvalidInputError, match="zero mean"):
        generate_forecast(make_product(), [0] * 30)


def test_forecast_is_repeatable(make_product):
    history = [20, 180] * 15
    assert generate_forecast(make_product(), history) == generate_forecast(make_product(), history)


def test_reasoning_without_confidence_note():
    assert build_reasoning(0.0, 1.0, 0.3) == "Stable demand pattern"


def test_forecast_products_skips_invalid_history(make_product):
    good = make_product(id="good")
    empty = make_product(id="empty")
    source = InMemoryDemandHistory({"good": [10] * 30})

    forecasts, skipped = forecast_products([good, empty], source)

    assert [f.product_id for f in forecasts] == ["good"]
    assert forecasts[0].predicted_demand == 10
    assert skipped[0]["product_id"] == "empty"
    assert "empty" in skipped[0]["reason"]


def test_string_history_is_rejected(make_product):
    with pytest.raises(InvalidInputError):
        generate_forecast(make_product(), "1" * 30)
