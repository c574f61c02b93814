"""
Validation utilities for calculator input.

Each validator runs its checks in a fixed order and raises
InvalidMeasurementError with the message of the first check that fails.
Nothing downstream of a validator ever sees unvalidated values.
"""
import logging
import math
from dataclasses import dataclass
from typing import Optional

from core.exceptions import InvalidMeasurementError
from schemas import BPReading, MeasurementInput

logger = logging.getLogger(__name__)

# BMI messages
MSG_MISSING_VALUES = "Please enter all required values"
MSG_INVALID_NUMBERS = "Please enter valid numbers"
MSG_NOT_POSITIVE = "All values must be positive numbers"
MSG_AGE_RANGE = "Please enter a valid age between 18 and 120"

# Blood pressure messages
MSG_BP_MISSING = "Please enter both systolic and diastolic values"
MSG_BP_NOT_POSITIVE = "Blood pressure values must be positive numbers"
MSG_BP_ORDER = "Systolic pressure must be greater than diastolic pressure"
MSG_BP_UNREALISTIC = "Please enter realistic blood pressure values"

MIN_AGE = 18
MAX_AGE = 120
MAX_SYSTOLIC = 300
MAX_DIASTOLIC = 200


@dataclass(frozen=True)
class ValidatedMeasurement:
    """BMI input that passed every check, still in the units the user chose."""
    weight: float
    height: float
    age: int
    gender: str
    weight_unit: str
    height_unit: str


@dataclass(frozen=True)
class ValidatedReading:
    """Blood pressure reading that passed every check (mmHg)."""
    systolic: int
    diastolic: int


# =============================================================================
# PARSING HELPERS
# =============================================================================

def is_blank(raw: Optional[str]) -> bool:
    """True if the field was left empty."""
    return raw is None or raw.strip() == ""


def parse_decimal(raw: str) -> Optional[float]:
    """Parse a real number; None if the text is not a finite number."""
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_whole(raw: str) -> Optional[int]:
    """
    Parse a whole number; None if the text is not a finite number.

    A fractional part is dropped ("120.7" -> 120), the same as the number
    inputs in the browser report it.
    """
    value = parse_decimal(raw)
    if value is None:
        return None
    return int(value)


# =============================================================================
# VALIDATORS
# =============================================================================

def _reject(message: str, **context) -> None:
    logger.info("Input rejected", extra={"reason": message, **context})
    raise InvalidMeasurementError(message, **context)


def validate_measurement(raw: MeasurementInput) -> ValidatedMeasurement:
    """
    Validate BMI form input.

    Checks, first failure wins:
    1. weight, height and age are all present
    2. all three parse as numbers
    3. all three are positive
    4. age is between 18 and 120

    Raises:
        InvalidMeasurementError: With the user-facing message of the failed check.
    """
    if is_blank(raw.weight) or is_blank(raw.height) or is_blank(raw.age):
        _reject(MSG_MISSING_VALUES, calculator="bmi")

    weight = parse_decimal(raw.weight)
    height = parse_decimal(raw.height)
    age = parse_whole(raw.age)
    if weight is None or height is None or age is None:
        _reject(MSG_INVALID_NUMBERS, calculator="bmi")

    if weight <= 0 or height <= 0 or age <= 0:
        _reject(MSG_NOT_POSITIVE, calculator="bmi")

    if age < MIN_AGE or age > MAX_AGE:
        _reject(MSG_AGE_RANGE, calculator="bmi", age=age)

    return ValidatedMeasurement(
        weight=weight,
        height=height,
        age=age,
        gender=raw.gender,
        weight_unit=raw.weight_unit,
        height_unit=raw.height_unit,
    )


def validate_reading(raw: BPReading) -> ValidatedReading:
    """
    Validate a blood pressure reading.

    Checks, first failure wins:
    1. both values are present
    2. both parse as numbers
    3. both are positive
    4. systolic is not below diastolic
    5. systolic <= 300 and diastolic <= 200

    Raises:
        InvalidMeasurementError: With the user-facing message of the failed check.
    """
    if is_blank(raw.systolic) or is_blank(raw.diastolic):
        _reject(MSG_BP_MISSING, calculator="bp")

    systolic = parse_whole(raw.systolic)
    diastolic = parse_whole(raw.diastolic)
    if systolic is None or diastolic is None:
        _reject(MSG_INVALID_NUMBERS, calculator="bp")

    if systolic <= 0 or diastolic <= 0:
        _reject(MSG_BP_NOT_POSITIVE, calculator="bp")

    if systolic < diastolic:
        _reject(MSG_BP_ORDER, calculator="bp", systolic=systolic, diastolic=diastolic)

    if systolic > MAX_SYSTOLIC or diastolic > MAX_DIASTOLIC:
        _reject(MSG_BP_UNREALISTIC, calculator="bp", systolic=systolic, diastolic=diastolic)

    return ValidatedReading(systolic=systolic, diastolic=diastolic)
