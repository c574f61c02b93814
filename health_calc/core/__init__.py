"""
Core module for application configuration, logging, and shared constants.

This module provides:
- Settings: Application configuration via pydantic-settings
- Exceptions: Domain-specific exception classes with HTTP status codes
- Logging: Structured JSON logging setup
- Reference registry: Category definitions and guidance text

Dependency injection functions live in core.dependencies and are imported
from there directly, since they pull in the service layer.
"""
from core.config import settings, Settings

# Exception classes for consistent error handling
from core.exceptions import (
    HealthCalcError,
    InvalidMeasurementError,
    UnsupportedUnitError,
    ReferenceDataError,
    setup_exception_handlers,
)

from core.logging_config import setup_logging, get_request_id

# Reference registry exports
from core.reference_registry import (
    BMICategory,
    BPCategory,
    list_bmi_categories,
    list_bp_categories,
    get_bp_category,
    get_risk_level_color,
)

__all__ = [
    # Settings
    "settings",
    "Settings",
    # Exceptions
    "HealthCalcError",
    "InvalidMeasurementError",
    "UnsupportedUnitError",
    "ReferenceDataError",
    "setup_exception_handlers",
    # Logging
    "setup_logging",
    "get_request_id",
    # Reference registry exports
    "BMICategory",
    "BPCategory",
    "list_bmi_categories",
    "list_bp_categories",
    "get_bp_category",
    "get_risk_level_color",
]
