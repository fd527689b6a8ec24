SCENARIO_DEFAULTS = {
    "demand_spike": {"spikePercentage": 50, "affectedCategories": []},
    "supply_delay": {"delayDays": 7, "affectedSuppliers": []},
    "route_disruption": {"affectedRoutes": [], "duration": 3},
}

# Ordered action templates per scenario type, formatted with the scenario's
# derived values (see forecasting/scenario_model.py).
SCENARIO_ACTIONS = {
    "demand_spike": (
        "Increase safety stock by {safety_stock_increase}%",
        "Expedite orders from backup suppliers",
        "Consider alternative fulfillment centers",
        "Communicate delivery expectations to customers",
    ),
    "supply_delay": (
        "Activate backup suppliers immediately",
        "Redistribute stock from other warehouses",
        "Adjust production schedule",
        "Prioritize high-margin products",
    ),
    "route_disruption": (
        "Switch to alternative carriers",
        "Use expedited shipping options",
        "Consolidate shipments where possible",
        "Update customer delivery estimates",
    ),
}

SCENARIO_IMPACTS = {
    "demand_spike": "{spike}% demand increase across {categories} categories",
    "supply_delay": "{delay} day delay from {suppliers} suppliers",
    "route_disruption": "Logistics disruption on {routes} routes for {duration} days",
}
