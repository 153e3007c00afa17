"""
Structured logging for the Ward Service.

Every log line carries the id of the request being served (or "-" outside a
request). Output is one JSON object per line by default; LOG_FORMAT=text
switches to a plain layout for a terminal.

JSON line:
{
    "timestamp": "2025-03-10T12:00:00.000Z",
    "level": "INFO",
    "logger": "services.patient_service",
    "message": "Patient admitted: John Doe (id=...)",
    "request_id": "3f9a1c2e",
    "extra": {"patient_id": "...", "bed_number": "A-101"}
}

Usage:
    from core.logging_config import setup_logging, request_context

    setup_logging(level="INFO", json_format=True)

    with request_context("3f9a1c2e"):
        logger.info("Temperature recorded", extra={"patient_id": "1"})
"""
import json
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

NO_REQUEST = "-"

_request_id: ContextVar[Optional[str]] = ContextVar("ward_request_id", default=None)

# LogRecord attributes that are not caller-supplied extras
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message", "asctime", "request_id",
}

APP_LOGGERS = ("core", "api", "services", "repositories", "main")

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(request_id)s | %(name)s | %(message)s"


def get_request_id() -> Optional[str]:
    return _request_id.get()


@contextmanager
def request_context(request_id: str) -> Iterator[str]:
    """Bind request_id to every log line emitted inside the block."""
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or NO_REQUEST
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record, UTC millisecond timestamps."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: Dict[str, Any] = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.") + f"{created.microsecond // 1000:03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None) or get_request_id()
        if request_id and request_id != NO_REQUEST:
            entry["request_id"] = request_id

        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS and not k.startswith("_")}
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """
    Install a single stdout handler on the root logger.

    LOG_LEVEL and LOG_FORMAT in the environment win over the arguments.
    Application and uvicorn loggers propagate to the root handler.
    """
    level = os.environ.get("LOG_LEVEL", level).upper()
    json_format = os.environ.get("LOG_FORMAT", "json" if json_format else "text").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for name in APP_LOGGERS + ("uvicorn", "uvicorn.error", "uvicorn.access"):
        named = logging.getLogger(name)
        named.handlers = []
        named.propagate = True
        if name in APP_LOGGERS:
            named.setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"level": level, "format": "json" if json_format else "text"}
    )
