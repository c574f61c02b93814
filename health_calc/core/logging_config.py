"""
Logging setup for the calculator app.

Every record leaves the process as one line on stdout, either as a JSON
object or as a pipe-separated text line. Both carry the id of the request
that produced them, so a slow BMI submission can be traced from
"Request started" to "BMI calculated" to "Request completed".

JSON line:
    {"timestamp": "2024-01-15T10:30:00.512Z", "level": "INFO",
     "logger": "services.bmi_service", "message": "BMI calculated",
     "request_id": "3f2a9c1d", "extra": {"bmi": 22.9, "category": "Normal Weight"}}

Text line:
    2024-01-15 10:30:00 | INFO     | 3f2a9c1d | services.bmi_service | BMI calculated

Usage:
    from core.logging_config import setup_logging

    setup_logging(level="DEBUG", json_format=False)
    logger.info("Blood pressure categorized", extra={"category": "Elevated"})
"""

import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

# Loggers owned by the app; each package logs under its own name
APP_LOGGERS = ("core", "api", "services")
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(request_id)s | %(name)s | %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Id of the request being handled, or None outside a request."""
    return request_id_var.get()


@contextmanager
def request_scope(request_id: str) -> Iterator[str]:
    """Bind ``request_id`` to every record logged inside the block."""
    token = request_id_var.set(request_id)
    try:
        yield request_id
    finally:
        request_id_var.reset(token)


# Every LogRecord carries these; anything else arrived through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message", "asctime", "request_id", "taskName",
}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class RequestIdFilter(logging.Filter):
    """Stamp ``record.request_id`` so text formats can reference it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record, timestamped in UTC to the millisecond."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.") + f"{created.microsecond // 1000:03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        extra = _extra_fields(record)
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def _build_handler(json_format: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    include_uvicorn: bool = True
) -> None:
    """
    Route all app logging through a single stdout handler.

    Args:
        level: Level name for the root and app loggers.
        json_format: JSON lines when True, text lines otherwise.
        include_uvicorn: Send uvicorn's own loggers through the same handler.

    The LOG_LEVEL and LOG_FORMAT environment variables win over the
    arguments, which lets an operator switch to text logs without a .env edit.
    """
    level = os.environ.get("LOG_LEVEL", level).upper()
    log_format = os.environ.get("LOG_FORMAT", "json" if json_format else "text").lower()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [_build_handler(log_format == "json")]

    for name in APP_LOGGERS:
        app_logger = logging.getLogger(name)
        app_logger.setLevel(level)
        app_logger.handlers = []
        app_logger.propagate = True

    if include_uvicorn:
        for name in UVICORN_LOGGERS:
            uvicorn_logger = logging.getLogger(name)
            uvicorn_logger.handlers = []
            uvicorn_logger.propagate = True

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"level": level, "format": log_format}
    )
