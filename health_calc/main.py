"""
Health Metrics Calculator: FastAPI application.

    LoggingMiddleware           request ids, start/completion logs
      └── routers
            ├── health          GET /health
            └── calculators     GET /, GET|POST /bmi, GET|POST /bp
                  └── CalculatorService (Depends) → bmi_service, bp_service

Run locally with ``python main.py`` or ``uvicorn main:app``; settings come
from HEALTH_CALC_* environment variables or a .env file.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from api.routers import calculators_router, health_router
from api.routers.health import APP_VERSION
from core.config import Settings, settings
from core.exceptions import setup_exception_handlers
from core.logging_config import setup_logging
from core.middleware import LoggingMiddleware

logger = logging.getLogger(__name__)


def create_app(config: Settings = settings) -> FastAPI:
    """Assemble the app: logging on startup, error handlers, middleware, routers."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(level=config.health_calc_log_level, json_format=config.json_logs)
        logger.info(
            "Health Metrics Calculator started",
            extra={
                "version": APP_VERSION,
                "calculation_delay_ms": config.health_calc_calculation_delay_ms,
            }
        )
        yield
        logger.info("Health Metrics Calculator stopped")

    app = FastAPI(
        title="Health Metrics Calculator",
        description="BMI and blood pressure calculators with categorized results and guidance.",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    app.add_middleware(LoggingMiddleware)

    app.include_router(health_router)
    app.include_router(calculators_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.health_calc_host,
        port=settings.health_calc_port,
        reload=settings.health_calc_reload,
    )
