"""
Liveness endpoint for process supervision.

The calculators have no external dependencies; the only thing that can be
missing is the reference data, which is loaded at import and fails fast. So
an answering process is a healthy one.
"""
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from core.reference_registry import list_bmi_categories, list_bp_categories

router = APIRouter(tags=["Health"])

APP_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Response model for /health."""
    status: str = Field(..., example="healthy")
    version: str = Field(..., example=APP_VERSION)
    timestamp: str = Field(..., description="ISO 8601, UTC", example="2024-01-15T10:30:00Z")
    bmi_categories: int = Field(..., description="BMI categories loaded", example=4)
    bp_categories: int = Field(..., description="Blood pressure categories loaded", example=4)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns 200 while the process is up, with the number of loaded reference categories."
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        bmi_categories=len(list_bmi_categories()),
        bp_categories=len(list_bp_categories()),
    )
