"""
Validation utilities for services.
"""
from services.validators.measurement_validator import (
    validate_measurement,
    validate_reading,
    parse_decimal,
    parse_whole,
    is_blank,
    ValidatedMeasurement,
    ValidatedReading,
)

__all__ = [
    "validate_measurement",
    "validate_reading",
    "parse_decimal",
    "parse_whole",
    "is_blank",
    "ValidatedMeasurement",
    "ValidatedReading",
]
