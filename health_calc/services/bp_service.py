"""
Blood pressure engine.

Categorizes a validated systolic/diastolic reading and attaches the
description and recommendations for the category. ``evaluate_bp`` is the
entry point for raw form input.
"""
import logging

from core.exceptions import InvalidMeasurementError
from core.reference_registry import get_bp_category
from schemas import BPReading, BPResult, CalculationOutcome
from services.validators import ValidatedReading, validate_reading

logger = logging.getLogger(__name__)

NORMAL = "Normal"
ELEVATED = "Elevated"
STAGE_1 = "High Blood Pressure (Stage 1)"
STAGE_2 = "High Blood Pressure (Stage 2)"


def classify_reading(systolic: int, diastolic: int) -> str:
    """
    Return the category label for a reading.

    Rules are checked in order and the first match wins. The Stage 1 rule is
    an OR, so it also catches readings like 135/70 or 150/85.
    """
    if systolic < 120 and diastolic < 80:
        return NORMAL
    if systolic < 130 and diastolic < 80:
        return ELEVATED
    if systolic < 140 or diastolic < 90:
        return STAGE_1
    return STAGE_2


def compute_bp(reading: ValidatedReading) -> BPResult:
    """Categorize a validated reading and look up its guidance."""
    category = get_bp_category(classify_reading(reading.systolic, reading.diastolic))
    return BPResult(
        category=category.label,
        color=category.color,
        risk_level=category.risk_level,
        description=category.description,
        recommendations=list(category.recommendations),
    )


def evaluate_bp(raw: BPReading) -> CalculationOutcome[BPResult]:
    """
    Validate a raw blood pressure reading and categorize it.

    Returns:
        CalculationOutcome with ``result`` on success or ``error`` holding the
        validation message.
    """
    try:
        reading = validate_reading(raw)
    except InvalidMeasurementError as e:
        return CalculationOutcome[BPResult](error=e.detail)

    result = compute_bp(reading)
    logger.info(
        "Blood pressure categorized",
        extra={"category": result.category, "risk_level": result.risk_level}
    )
    return CalculationOutcome[BPResult](result=result)
