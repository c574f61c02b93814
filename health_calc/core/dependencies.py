"""
FastAPI Dependency Injection configuration for the Health Calculator.

Architecture Flow:
    API Layer (Routers)
         ↓ Depends()
    CalculatorService (panel submissions)
         ↓ calls
    Engines (services/bmi_service.py, services/bp_service.py)

Usage in Routers:
    from core.dependencies import get_calculator_service

    @router.post("/bmi")
    async def calculate(
        calculator: CalculatorService = Depends(get_calculator_service)
    ):
        ...

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_calculator_service] = lambda: CalculatorService(delay_seconds=0)
"""
import logging
from functools import lru_cache
from pathlib import Path

from fastapi.templating import Jinja2Templates

from core.config import settings
from services.calculator_service import CalculatorService

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "api" / "templates"


def get_calculator_service() -> CalculatorService:
    """
    Get a CalculatorService configured from settings.

    The service holds no state, so each request gets its own instance.
    """
    return CalculatorService(delay_seconds=settings.calculation_delay_seconds)


@lru_cache(maxsize=1)
def get_templates() -> Jinja2Templates:
    """Get the shared Jinja2 template renderer (created once)."""
    logger.debug("Loading templates", extra={"directory": str(TEMPLATES_DIR)})
    return Jinja2Templates(directory=str(TEMPLATES_DIR))
