"""Volume unit conversion and text rendering of amounts and clock times."""

import math

OZ_TO_ML = 29.5735295625
MAX_AMOUNT = 6553.5


def coerce_number(value: object) -> float:
    """Return ``value`` as a float, treating anything non-numeric as zero."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    return number


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward instead of to the nearest even digit."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def clamp_int(value: object, low: int, high: int) -> int:
    """Round and clamp a loosely typed value into an integer range."""
    number = min(max(coerce_number(value), low), high)
    return int(round_half_up(number))


def clamp_amount(value: object) -> float:
    """Clamp an amount or goal into [0, 6553.5] with one decimal of precision."""
    number = min(max(coerce_number(value), 0.0), MAX_AMOUNT)
    return round_half_up(number, 1)


def convert_amount(amount: float, from_oz: bool, to_oz: bool) -> float:
    """Convert an amount between fluid ounces and millilitres."""
    if from_oz == to_oz:
        return amount
    if from_oz:
        return amount * OZ_TO_ML
    return amount / OZ_TO_ML


def format_amount(amount: float, from_oz: bool, to_oz: bool) -> str:
    """Render an amount in the target unit, e.g. ``"8.0 oz"`` or ``"237 mL"``."""
    converted = convert_amount(amount, from_oz, to_oz)
    if to_oz:
        return f"{round_half_up(converted, 1):.1f} oz"
    return f"{int(round_half_up(converted))} mL"


def format_time(hour: int, minute: int, use_meridiem: bool) -> str:
    """Render a wall-clock time as ``H:MM`` or ``h:MMam``/``h:MMpm``."""
    if not use_meridiem:
        return f"{hour}:{minute:02d}"
    suffix = "am" if hour < 12 else "pm"
    return f"{hour % 12 or 12}:{minute:02d}{suffix}"
