"""
Health and readiness endpoints for operational visibility.

- /health: Liveness probe (is the app running?)
- /ready: Readiness probe (store reachable, patient records readable)

No authentication, lightweight checks, machine-readable JSON.
"""
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from core.datetime_utils import format_iso, utc_now
from core.dependencies import get_record_store
from core.exceptions import RecordStoreError
from repositories import PATIENTS, PatientRepository, RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health & Observability"])

SERVICE_NAME = "Ward Service API"
SERVICE_VERSION = "1.0.0"


class HealthResponse(BaseModel):
    status: str  # "healthy"
    version: str
    timestamp: str


class DependencyStatus(BaseModel):
    name: str
    status: str  # "ok" or "unavailable"
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class ReadyResponse(BaseModel):
    status: str  # "ready" or "not_ready"
    dependencies: List[DependencyStatus]
    timestamp: str


@router.get(
    "/",
    summary="API root",
    description="Service name, version and links to the operational endpoints."
)
async def root() -> Dict[str, Any]:
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Returns immediately without checking dependencies."
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=SERVICE_VERSION,
        timestamp=format_iso(utc_now()),
    )


def _run_check(name: str, probe: Callable[[], str]) -> DependencyStatus:
    """Time probe(); a RecordStoreError marks the dependency unavailable."""
    started = time.perf_counter()
    try:
        message = probe()
        state = "ok"
    except RecordStoreError as e:
        logger.error(f"Readiness check '{name}' failed", extra={"error": e.detail})
        message = e.detail
        state = "unavailable"
    return DependencyStatus(
        name=name,
        status=state,
        latency_ms=round((time.perf_counter() - started) * 1000, 2),
        message=message,
    )


def _store_checks(store: RecordStore) -> List[DependencyStatus]:
    def ping() -> str:
        store.ping()
        return f"{type(store).__name__} reachable"

    def patients() -> str:
        if not store.has(PATIENTS):
            return "no patient collection yet"
        return f"{len(PatientRepository(store).get_all())} patient records readable"

    return [_run_check("record_store", ping), _run_check("patient_records", patients)]


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness probe",
    description="Pings the record store and reads the patient collection. "
                "Returns 503 if either fails."
)
async def readiness_check(
    response: Response,
    store: RecordStore = Depends(get_record_store),
) -> ReadyResponse:
    checks = _store_checks(store)
    ready = all(c.status == "ok" for c in checks)
    if not ready:
        response.status_code = 503

    return ReadyResponse(
        status="ready" if ready else "not_ready",
        dependencies=checks,
        timestamp=format_iso(utc_now()),
    )
