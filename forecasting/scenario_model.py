"""
What-if scenario estimates.

Each scenario type applies a closed-form cost model to its parameters; nothing
here is random, so the same parameters always give the same result.
Parameter names follow the host's camelCase payloads.
"""
import math
from typing import Any, Mapping

from forecasting.exceptions import InvalidInputError, UnknownScenarioError
from forecasting.records import ScenarioResult, ScenarioType
from utils.math_utils import format_number, round_half_up
from utils.scenario_actions import SCENARIO_ACTIONS, SCENARIO_DEFAULTS, SCENARIO_IMPACTS


def _param(parameters: Mapping[str, Any], scenario: ScenarioType, key: str):
    value = parameters.get(key)
    return SCENARIO_DEFAULTS[scenario.value][key] if value is None else value


def _non_negative(parameters, scenario, key):
    value = _param(parameters, scenario, key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidInputError(f"{key} must be a number, got {value!r}")
    if value < 0:
        raise InvalidInputError(f"{key} must be non-negative, got {value!r}")
    return value


def _listing(parameters, scenario, key):
    value = _param(parameters, scenario, key)
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidInputError(f"{key} must be a list, got {value!r}")
    return tuple(value)


def _actions(scenario: ScenarioType, **values):
    return tuple(template.format(**values) for template in SCENARIO_ACTIONS[scenario.value])


def _demand_spike(parameters) -> ScenarioResult:
    scenario = ScenarioType.DEMAND_SPIKE
    spike = _non_negative(parameters, scenario, "spikePercentage")
    categories = _listing(parameters, scenario, "affectedCategories")

    return ScenarioResult(
        impact=SCENARIO_IMPACTS[scenario.value].format(
            spike=format_number(spike), categories=len(categories) or "all"),
        affected_products=categories,
        recommended_actions=_actions(scenario, safety_stock_increase=round_half_up(spike / 2)),
        estimated_cost_impact=15000 + spike * 200,
        timeline_adjustment=math.ceil(spike / 10),
    )


def _supply_delay(parameters) -> ScenarioResult:
    scenario = ScenarioType.SUPPLY_DELAY
    delay_days = _non_negative(parameters, scenario, "delayDays")
    suppliers = _listing(parameters, scenario, "affectedSuppliers")

    return ScenarioResult(
        impact=SCENARIO_IMPACTS[scenario.value].format(
            delay=format_number(delay_days), suppliers=len(suppliers)),
        affected_products=suppliers,
        recommended_actions=_actions(scenario),
        estimated_cost_impact=delay_days * 2000,
        timeline_adjustment=math.ceil(delay_days),
    )


def _route_disruption(parameters) -> ScenarioResult:
    scenario = ScenarioType.ROUTE_DISRUPTION
    routes = _listing(parameters, scenario, "affectedRoutes")
    duration = _non_negative(parameters, scenario, "duration")

    return ScenarioResult(
        impact=SCENARIO_IMPACTS[scenario.value].format(
            routes=len(routes), duration=format_number(duration)),
        affected_products=routes,
        recommended_actions=_actions(scenario),
        estimated_cost_impact=len(routes) * duration * 500,
        timeline_adjustment=math.ceil(duration) + 2,
    )


SIMULATORS = {
    ScenarioType.DEMAND_SPIKE: _demand_spike,
    ScenarioType.SUPPLY_DELAY: _supply_delay,
    ScenarioType.ROUTE_DISRUPTION: _route_disruption,
}


def simulate_scenario(scenario_type, parameters: Mapping[str, Any] | None = None) -> ScenarioResult:
    """
    Runs one of the known scenario estimators.
    Raises UnknownScenarioError for any other scenario type.
    """
    try:
        scenario = ScenarioType(scenario_type)
    except ValueError:
        raise UnknownScenarioError(scenario_type) from None

    if parameters is None:
        parameters = {}
    if not isinstance(parameters, Mapping):
        raise InvalidInputError("scenario parameters must be a mapping")
    return SIMULATORS[scenario](parameters)
