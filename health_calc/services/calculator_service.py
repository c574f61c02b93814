"""
Service layer for the calculator panels.

This service turns a submitted panel state into the next panel state:
validation errors come back immediately, results come back after a short
deferred completion so the page can show its "Calculating..." state.

Architecture:
    API Layer (routers) → CalculatorService → bmi_service / bp_service

Dependency Injection:
    CalculatorService receives its delay via constructor injection.
    Use core.dependencies.get_calculator_service() in routers with Depends().
"""
import asyncio
import logging
import math
from typing import Optional, Tuple, TypeVar

from schemas import BMIFormState, BPFormState
from services.bmi_service import evaluate_bmi
from services.bp_service import evaluate_bp
from services.unit_converter import (
    convert_for_display,
    from_metric,
    require_same_dimension,
    round_display,
    to_metric,
)
from services.validators import parse_decimal

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def deliver_after(delay_seconds: float, value: T) -> T:
    """
    Hand back ``value`` once ``delay_seconds`` have passed.

    The wait never blocks the event loop and cannot be cancelled by a later
    submission; a later submission simply produces its own page.
    """
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)
    return value


def _shown_value(metric: Optional[float], unit: str) -> Optional[float]:
    """The one-decimal value a field in ``unit`` shows for ``metric``, if representable."""
    if metric is None or not math.isfinite(metric):
        return None
    value = from_metric(metric, unit)
    return round_display(value) if math.isfinite(value) else None


def _convert_field(
    raw: str,
    metric: Optional[float],
    metric_unit: str,
    from_unit: str,
    to_unit: str,
) -> Tuple[str, Optional[float]]:
    """
    Re-express a typed field value in another unit.

    ``metric`` is the unrounded value (in ``metric_unit``) behind the field
    text from the previous conversion. It is used instead of the text as long
    as the text still shows that value, so cm -> ft -> cm gives back 175.0
    rather than 173.7. Unparsable text and values that would leave the float
    range are left as typed.

    Returns:
        The new field text and the unrounded metric value behind it.
    """
    require_same_dimension(from_unit, to_unit)
    if from_unit == to_unit:
        return raw, metric
    value = parse_decimal(raw) if raw else None
    if value is None:
        return raw, None

    if _shown_value(metric, from_unit) != value:
        metric = to_metric(value, from_unit)
    if _shown_value(metric, to_unit) is None:
        return raw, None
    return f"{convert_for_display(metric, metric_unit, to_unit):.1f}", metric


class CalculatorService:
    """
    Service layer for BMI and blood pressure panel submissions.

    Holds no per-request state; every method takes the full panel state and
    returns a new one.
    """

    def __init__(self, delay_seconds: float = 0.5):
        """
        Initialize the calculator service.

        Args:
            delay_seconds: Simulated latency before a result is delivered.
                           Injected via core.dependencies.get_calculator_service().
        """
        self._delay_seconds = delay_seconds

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    def change_units(
        self,
        state: BMIFormState,
        previous_weight_unit: str,
        previous_height_unit: str,
    ) -> BMIFormState:
        """
        Apply a unit selector change to the BMI panel.

        Weight and height are converted from the previously selected unit to
        the one now selected and rounded to one decimal. The unrounded metric
        value is kept on the state so a later change converts from it rather
        than from the rounded text. Any earlier result or error is cleared.

        Raises:
            UnsupportedUnitError: If a previous unit is not a unit of the same
                dimension as the field it belongs to.
        """
        weight, weight_kg = _convert_field(
            state.weight, state.weight_kg, "kg", previous_weight_unit, state.weight_unit
        )
        height, height_cm = _convert_field(
            state.height, state.height_cm, "cm", previous_height_unit, state.height_unit
        )
        logger.debug(
            "Units changed",
            extra={
                "weight_unit": f"{previous_weight_unit}->{state.weight_unit}",
                "height_unit": f"{previous_height_unit}->{state.height_unit}",
            }
        )
        return state.model_copy(
            update={
                "weight": weight,
                "height": height,
                "weight_kg": weight_kg,
                "height_cm": height_cm,
                "result": None,
                "error": "",
                "is_calculating": False,
            }
        )

    async def submit_bmi(self, state: BMIFormState) -> BMIFormState:
        """
        Calculate the BMI panel.

        Returns:
            The panel state with either ``error`` or ``result`` set.
        """
        outcome = evaluate_bmi(state.to_input())
        if not outcome.ok:
            return state.model_copy(update={"result": None, "error": outcome.error, "is_calculating": False})

        result = await deliver_after(self._delay_seconds, outcome.result)
        return state.model_copy(update={"result": result, "error": "", "is_calculating": False})

    async def submit_bp(self, state: BPFormState) -> BPFormState:
        """
        Categorize the blood pressure panel.

        Returns:
            The panel state with either ``error`` or ``result`` set.
        """
        outcome = evaluate_bp(state.to_reading())
        if not outcome.ok:
            return state.model_copy(update={"result": None, "error": outcome.error, "is_calculating": False})

        result = await deliver_after(self._delay_seconds, outcome.result)
        return state.model_copy(update={"result": result, "error": "", "is_calculating": False})
