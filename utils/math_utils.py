import math


def round_half_up(value: float) -> int:
    # round() uses banker's rounding; demand figures round .5 upwards
    return int(math.floor(value + 0.5))


def format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
