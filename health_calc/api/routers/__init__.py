"""
API routers module.

This module contains all route definitions organized by purpose.
"""
from api.routers.health import router as health_router
from api.routers.calculators import router as calculators_router

__all__ = ["health_router", "calculators_router"]
