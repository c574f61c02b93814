"""
Request logging middleware.

Each request gets a short id that is bound to every log record written while
the request is handled and echoed back in the X-Request-ID header. Calculator
submissions include the simulated delay, so ``duration_ms`` on "Request
completed" shows the latency the page actually saw.
"""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging_config import request_scope

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def new_request_id() -> str:
    """Eight hex characters; enough to tell concurrent requests apart in a log."""
    return uuid.uuid4().hex[:8]


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log request start and completion under a per-request id."""

    # Probes and docs assets are not logged
    QUIET_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"})

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = new_request_id()
        path = request.url.path
        fields = {"method": request.method, "path": path}
        quiet = path in self.QUIET_PATHS

        with request_scope(request_id):
            if not quiet:
                logger.info("Request started", extra=fields)

            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Request failed", extra=fields)
                raise

            if not quiet:
                logger.log(
                    logging.WARNING if response.status_code >= 400 else logging.INFO,
                    "Request completed",
                    extra={
                        **fields,
                        "status_code": response.status_code,
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    }
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
