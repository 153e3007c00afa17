"""
Request logging middleware.

Each request runs inside a request_context so every log line it produces
carries the same id. A well-formed X-Request-ID sent by the caller (a ward
dashboard, a proxy) is reused; otherwise a short id is generated. The id is
echoed back in the response header.

Requests under /api/v1/patients/{id} also carry the patient id in their
start and completion lines, so one patient's activity can be grepped out of
the log.
"""
import logging
import re
import time
import uuid
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging_config import request_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,64}")
_PATIENT_PATH = re.compile(r"^/api/v1/patients/(?P<patient_id>[^/]+)")


def resolve_request_id(incoming: Optional[str]) -> str:
    """Reuse the caller's request id when it is safe to log, else make one."""
    if incoming and _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex[:8]


def patient_id_from_path(path: str) -> Optional[str]:
    match = _PATIENT_PATH.match(path)
    return match.group("patient_id") if match else None


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line when a request starts and one when it finishes."""

    # Polled by probes and browsers; not worth a log line each
    QUIET_PATHS = frozenset({"/health", "/ready", "/docs", "/redoc", "/openapi.json"})

    # Completed requests slower than this are logged at WARNING
    SLOW_REQUEST_MS = 1000.0

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        path = request.url.path
        quiet = path in self.QUIET_PATHS
        context = {"method": request.method, "path": path}
        patient_id = patient_id_from_path(path)
        if patient_id:
            context["patient_id"] = patient_id

        with request_context(request_id):
            if not quiet:
                logger.info("Request started", extra=dict(context, query=str(request.query_params) or None))

            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Request failed", extra=context)
                raise
            duration_ms = round((time.perf_counter() - started) * 1000, 2)

            if not quiet:
                slow = duration_ms > self.SLOW_REQUEST_MS
                level = logging.WARNING if response.status_code >= 400 or slow else logging.INFO
                logger.log(
                    level,
                    "Request completed",
                    extra=dict(context, status_code=response.status_code, duration_ms=duration_ms, slow=slow)
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
