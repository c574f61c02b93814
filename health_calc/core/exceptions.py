"""
Error types for the calculators.

User mistakes in a form are not exceptional for the page: the validators
raise InvalidMeasurementError, and the engines turn it into the inline
message under the form. The JSON handler registered here only sees errors
that a browser form cannot produce, such as a unit tag outside the supported
set, or broken reference data.

Response body:
    {"error": "unsupported_unit", "detail": "Unsupported unit 'stone'",
     "context": {"unit": "stone"}}
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class HealthCalcError(Exception):
    """Base class; carries an error code, a message, an HTTP status and context."""

    error_code: str = "internal_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        **context: Any
    ):
        self.detail = detail or type(self).detail
        self.status_code = status_code or type(self).status_code
        self.context = context
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error_code, "detail": self.detail}
        if self.context:
            body["context"] = self.context
        return body


class InvalidMeasurementError(HealthCalcError):
    """
    A form value failed validation.

    ``detail`` is the exact text shown under the form, e.g.
    "Please enter a valid age between 18 and 120".
    """

    error_code = "invalid_measurement"
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid measurement"


class UnsupportedUnitError(HealthCalcError):
    """A unit tag outside kg/lbs and cm/ft/in, or a mass/length mix-up."""

    error_code = "unsupported_unit"
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Unsupported unit"

    def __init__(self, unit: Optional[str] = None, **context: Any):
        super().__init__(
            detail=f"Unsupported unit '{unit}'" if unit else None,
            unit=unit,
            **context
        )


class ReferenceDataError(HealthCalcError):
    """reference_ranges.yaml is missing, unreadable or inconsistent."""

    error_code = "reference_data"
    detail = "Reference data could not be loaded"


async def health_calc_exception_handler(request: Request, exc: HealthCalcError) -> JSONResponse:
    """Render a HealthCalcError as JSON with its own status code."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.detail}",
        extra={
            "error": exc.error_code,
            "status_code": exc.status_code,
            "path": request.url.path,
            "context": exc.context,
        }
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the HealthCalcError handler on ``app``."""
    app.add_exception_handler(HealthCalcError, health_calc_exception_handler)
