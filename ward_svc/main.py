"""
FastAPI application entry point for the Ward Service API.

Architecture Overview:
    ┌─────────────────────────────────────────────────────────────┐
    │                     FastAPI Application                      │
    ├─────────────────────────────────────────────────────────────┤
    │  Middleware                                                  │
    │    ├── LoggingMiddleware  - request id, request logging      │
    │    └── CORSMiddleware     - ward dashboards in the browser   │
    ├─────────────────────────────────────────────────────────────┤
    │  Routers (api/routers/)                                      │
    │    ├── health.py        - /, /health, /ready                 │
    │    ├── patients.py      - admission, status, discharge       │
    │    ├── observations.py  - temperatures and notes             │
    │    ├── ward.py          - bed and outcome statistics         │
    │    └── meta.py          - clinical rule configuration        │
    ├─────────────────────────────────────────────────────────────┤
    │  Services (services/)           ← Injected via Depends()     │
    │    ├── PatientService, ObservationService, WardService       │
    │    └── clinical_rules           - pure rules engine          │
    ├─────────────────────────────────────────────────────────────┤
    │  Repositories (repositories/)   ← Injected into Services     │
    ├─────────────────────────────────────────────────────────────┤
    │  Record Store (SQLite key-value) ← Injected into Repositories│
    └─────────────────────────────────────────────────────────────┘
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from core.config import API_HOST, API_PORT, API_RELOAD, settings
from core.dependencies import get_record_store
from core.exceptions import setup_exception_handlers
from core.logging_config import setup_logging
from core.middleware import LoggingMiddleware
from api.routers import (
    health_router,
    patients_router,
    observations_router,
    ward_router,
    meta_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, open (and if needed seed) the record store.
    Shutdown: log and exit; connections are per-call so nothing to close.
    """
    setup_logging(level=settings.log_level, json_format=settings.log_format.lower() == "json")

    logger = logging.getLogger(__name__)
    logger.info("Starting Ward Service API...")

    store = get_record_store()
    logger.info(
        "Record store ready",
        extra={"store": type(store).__name__, "total_beds": settings.ward_svc_total_beds}
    )

    yield

    logger.info("Ward Service API shutting down...")


app = FastAPI(
    title="Ward Service API",
    description="Ward tracking: admissions, temperature observations, clinical notes, "
                "bed and outcome statistics, and fever-free discharge approval.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

setup_exception_handlers(app)

# Middleware runs in reverse order of registration: logging wraps CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)

app.include_router(health_router)
app.include_router(patients_router)
app.include_router(observations_router)
app.include_router(ward_router)
app.include_router(meta_router)


def run() -> None:
    """Console entry point."""
    uvicorn.run(
        "main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD
    )


if __name__ == "__main__":
    run()
