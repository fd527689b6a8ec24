"""Errors raised by the forecasting engine.

Every error is local to a single computation; calling again with the same
arguments raises the same error.
"""


class EngineError(Exception):
    pass


class InvalidInputError(EngineError, ValueError):
    """An input failed a precondition (empty series, zero mean, bad parameter)."""


class UnknownScenarioError(EngineError, ValueError):
    """The requested scenario type is not one of the known variants."""

    def __init__(self, scenario_type):
        self.scenario_type = scenario_type
        super().__init__(f"Unknown scenario type: {scenario_type!r}")
