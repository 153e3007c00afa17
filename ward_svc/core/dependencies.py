"""
FastAPI dependency injection for the Ward Service.

Architecture Flow:
    API Layer (Routers)
         ↓ Depends()
    Service Layer (PatientService, ObservationService, WardService)
         ↓ Injected
    Repository Layer (Patient/Temperature/Note repositories)
         ↓ Injected
    Record Store (SQLite)

Usage in Routers:
    from core.dependencies import get_patient_service

    @router.post("/patients")
    async def admit(payload: PatientCreate, service: PatientService = Depends(get_patient_service)):
        ...

Testing:
    app.dependency_overrides[get_record_store] = lambda: InMemoryRecordStore()
"""
import logging
from typing import Optional

from core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# RECORD STORE DEPENDENCY
# =============================================================================

# Imported lazily to avoid circular imports with repositories
_store_instance: Optional["RecordStore"] = None


def get_record_store() -> "RecordStore":
    """
    Get the record store (created once, then reused).

    The first call opens the SQLite store and seeds the demonstration
    dataset if the patient collection has never been written and seeding
    is enabled.
    """
    global _store_instance

    if _store_instance is None:
        from repositories import SQLiteRecordStore, ensure_seeded

        logger.info(f"Initializing record store: {settings.database_path}")
        store = SQLiteRecordStore(
            db_path=settings.database_path,
            busy_timeout=settings.ward_svc_db_busy_timeout,
        )
        if settings.ward_svc_seed_demo_data:
            ensure_seeded(store)
        _store_instance = store

    return _store_instance


def reset_record_store() -> None:
    """Drop the cached store (for testing only)."""
    global _store_instance
    _store_instance = None


# =============================================================================
# REPOSITORY DEPENDENCIES
# =============================================================================

def get_patient_repository() -> "PatientRepository":
    from repositories import PatientRepository

    return PatientRepository(store=get_record_store())


def get_temperature_repository() -> "TemperatureRepository":
    from repositories import TemperatureRepository

    return TemperatureRepository(store=get_record_store())


def get_note_repository() -> "NoteRepository":
    from repositories import NoteRepository

    return NoteRepository(store=get_record_store())


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_patient_service() -> "PatientService":
    """
    Get a PatientService wired with its repositories and ward settings.

    Returns:
        PatientService: Admission, status changes and discharge approval.
    """
    from services import PatientService

    return PatientService(
        patient_repository=get_patient_repository(),
        temperature_repository=get_temperature_repository(),
        total_beds=settings.ward_svc_total_beds,
        fever_free_days=settings.ward_svc_fever_free_days,
        fever_threshold=settings.ward_svc_fever_threshold,
    )


def get_observation_service() -> "ObservationService":
    """
    Get an ObservationService for temperatures and notes.

    Returns:
        ObservationService: Reading and note entry plus their accessors.
    """
    from services import ObservationService

    return ObservationService(
        patient_repository=get_patient_repository(),
        temperature_repository=get_temperature_repository(),
        note_repository=get_note_repository(),
        min_temperature=settings.ward_svc_min_temperature,
        max_temperature=settings.ward_svc_max_temperature,
    )


def get_ward_service() -> "WardService":
    """
    Get a WardService for statistics and discharge eligibility.

    Returns:
        WardService: Bed/outcome statistics and the fever-free check.
    """
    from services import WardService

    return WardService(
        patient_repository=get_patient_repository(),
        temperature_repository=get_temperature_repository(),
        total_beds=settings.ward_svc_total_beds,
        fever_free_days=settings.ward_svc_fever_free_days,
        fever_threshold=settings.ward_svc_fever_threshold,
    )
