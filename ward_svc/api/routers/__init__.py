"""
API routers module.

This module contains all API route definitions organized by domain.
"""
from api.routers.health import router as health_router
from api.routers.patients import router as patients_router
from api.routers.observations import router as observations_router
from api.routers.ward import router as ward_router
from api.routers.meta import router as meta_router

__all__ = [
    "health_router",
    "patients_router",
    "observations_router",
    "ward_router",
    "meta_router",
]
