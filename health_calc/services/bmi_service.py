"""
BMI engine.

Pure functions: validated input in, BMIResult out. ``evaluate_bmi`` is the
entry point for raw form input and never raises for bad user input; it
returns a CalculationOutcome carrying either the result or the message to
show.

Formulas:
    bmi        = weight_kg / height_m ** 2
    body fat   = 1.2 * bmi + 0.23 * age - 3.8 * male - 5.4     (Deurenberg)
    ideal (kg) = 50 (male) / 45.5 (female) + 2.3 * (inches - 60)  (Devine),
                 reported as a -10% / +10% range
"""
import logging
import math

from core.exceptions import InvalidMeasurementError
from core.reference_registry import BMICategory, list_bmi_categories
from schemas import BMIResult, CalculationOutcome, IdealWeightRange, MeasurementInput
from services.unit_converter import CM_PER_IN, round_display, round_half_up, to_metric
from services.validators import ValidatedMeasurement, validate_measurement
from services.validators.measurement_validator import MSG_INVALID_NUMBERS

logger = logging.getLogger(__name__)


def _require_in_range(name: str, value: float, positive: bool = False) -> None:
    """
    Reject an intermediate value that left the float range.

    Inputs such as 1e308 kg or 1e-200 cm pass validation but overflow or
    underflow once converted and combined.
    """
    if math.isfinite(value) and (value > 0 or not positive):
        return
    logger.info("Input out of range", extra={"reason": MSG_INVALID_NUMBERS, "quantity": name})
    raise InvalidMeasurementError(MSG_INVALID_NUMBERS, calculator="bmi", quantity=name)


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """
    Body Mass Index at full precision.

    Raises:
        InvalidMeasurementError: If the squared height or the BMI is not a
            positive finite number.
    """
    height_m = height_cm / 100
    height_m_squared = height_m * height_m
    _require_in_range("height_m_squared", height_m_squared, positive=True)
    bmi = weight_kg / height_m_squared
    _require_in_range("bmi", bmi, positive=True)
    return bmi


def estimate_body_fat(bmi: float, age: int, gender: str) -> float:
    """Body fat percentage from the Deurenberg equation, one decimal."""
    male = 1 if gender == "male" else 0
    body_fat = (1.2 * bmi) + (0.23 * age) - (3.8 * male) - 5.4
    _require_in_range("body_fat", body_fat)
    return round_display(body_fat)


def ideal_weight_range(height_cm: float, gender: str) -> IdealWeightRange:
    """Ideal weight range from the Devine formula, in whole kilograms."""
    height_in = height_cm / CM_PER_IN
    base = 45.5 if gender == "female" else 50
    ideal = base + 2.3 * (height_in - 60)
    _require_in_range("ideal_weight", ideal * 1.1)
    return IdealWeightRange(
        min=round_half_up(ideal * 0.9),
        max=round_half_up(ideal * 1.1),
    )


def classify_bmi(bmi: float) -> BMICategory:
    """
    Find the category for an unrounded BMI.

    Bounds are exclusive upper bounds, so 18.5 is Normal Weight, 25 is
    Overweight and 30 is Obese.
    """
    for category in list_bmi_categories():
        if category.contains(bmi):
            return category
    # The registry guarantees an open-ended last category
    raise AssertionError("BMI categories do not cover every value")


def compute_bmi(measurement: ValidatedMeasurement) -> BMIResult:
    """
    Run every BMI formula on validated input.

    Raises:
        InvalidMeasurementError: If a converted or intermediate value is out
            of the float range; the message is the invalid-numbers one.
    """
    weight_kg = to_metric(measurement.weight, measurement.weight_unit)
    height_cm = to_metric(measurement.height, measurement.height_unit)
    _require_in_range("weight_kg", weight_kg, positive=True)
    _require_in_range("height_cm", height_cm, positive=True)

    bmi = calculate_bmi(weight_kg, height_cm)
    category = classify_bmi(bmi)

    return BMIResult(
        bmi=round_display(bmi),
        category=category.label,
        color=category.color,
        body_fat_percentage=estimate_body_fat(bmi, measurement.age, measurement.gender),
        ideal_weight=ideal_weight_range(height_cm, measurement.gender),
    )


def evaluate_bmi(raw: MeasurementInput) -> CalculationOutcome[BMIResult]:
    """
    Validate raw BMI form input and calculate.

    Returns:
        CalculationOutcome with ``result`` on success or ``error`` holding the
        validation message.
    """
    try:
        result = compute_bmi(validate_measurement(raw))
    except InvalidMeasurementError as e:
        return CalculationOutcome[BMIResult](error=e.detail)

    logger.info(
        "BMI calculated",
        extra={"bmi": result.bmi, "category": result.category}
    )
    return CalculationOutcome[BMIResult](result=result)
