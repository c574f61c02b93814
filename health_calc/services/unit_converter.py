"""
Unit conversion for calculator input.

Calculations always run in metric (kg, cm). Values entered in other units are
converted on the way in with fixed factors and no rounding; rounding only
happens when a converted value is written back into a form field.
"""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP

from core.exceptions import UnsupportedUnitError

logger = logging.getLogger(__name__)

KG_PER_LB = 0.453592
CM_PER_FT = 30.48
CM_PER_IN = 2.54

# unit -> (dimension, factor to the canonical unit)
_UNITS = {
    "kg": ("mass", 1.0),
    "lbs": ("mass", KG_PER_LB),
    "cm": ("length", 1.0),
    "ft": ("length", CM_PER_FT),
    "in": ("length", CM_PER_IN),
}

WEIGHT_UNITS = ("kg", "lbs")
HEIGHT_UNITS = ("cm", "ft", "in")


def _lookup(unit: str):
    try:
        return _UNITS[unit]
    except KeyError:
        raise UnsupportedUnitError(unit=unit) from None


def to_metric(value: float, unit: str) -> float:
    """
    Express a value in its canonical unit (kg for mass, cm for length).

    Args:
        value: The measured value.
        unit: One of kg, lbs, cm, ft, in.

    Raises:
        UnsupportedUnitError: If the unit is not supported.
    """
    _, factor = _lookup(unit)
    return value * factor


def from_metric(value: float, unit: str) -> float:
    """Inverse of to_metric: express a canonical value in the given unit."""
    _, factor = _lookup(unit)
    return value / factor


def round_display(value: float, places: int = 1) -> float:
    """
    Round half away from zero on the exact binary value of ``value``.

    This is how numbers are rounded for display in the form fields and
    results, so 0.25 becomes 0.3 rather than the banker's 0.2.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with ties going toward positive infinity."""
    return math.floor(value + 0.5)


def require_same_dimension(from_unit: str, to_unit: str) -> None:
    """Raise UnsupportedUnitError unless both units measure the same thing."""
    from_dimension, _ = _lookup(from_unit)
    to_dimension, _ = _lookup(to_unit)
    if from_dimension != to_dimension:
        raise UnsupportedUnitError(
            unit=to_unit,
            reason=f"cannot convert {from_dimension} ({from_unit}) to {to_dimension} ({to_unit})",
        )


def convert_for_display(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert a form value between two units of the same dimension.

    Used when a unit selector changes: the typed value is re-expressed in the
    newly selected unit and rounded to one decimal.

    Raises:
        UnsupportedUnitError: If either unit is unknown or the units measure
            different dimensions.
    """
    require_same_dimension(from_unit, to_unit)

    converted = from_metric(to_metric(value, from_unit), to_unit)
    logger.debug(
        "Converted form value",
        extra={"from_unit": from_unit, "to_unit": to_unit, "value": value, "converted": converted}
    )
    return round_display(converted)
