"""
Shared pytest fixtures.

Fixture Hierarchy:
    clock, store → repositories → services → test_app → client

Services run against an in-memory record store and a fixed clock, so
"now" in every test is NOW unless the test moves the clock.
"""
import os
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Never seed the demo dataset into a store a test did not ask for
os.environ.setdefault("WARD_SVC_SEED_DEMO_DATA", "false")

from core import dependencies as deps
from core.exceptions import setup_exception_handlers
from models import TemperatureRecord
from repositories import (
    InMemoryRecordStore,
    NoteRepository,
    PatientRepository,
    SQLiteRecordStore,
    TemperatureRepository,
)
from services import ObservationService, PatientService, WardService

NOW = datetime(2025, 3, 10, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(NOW)


@pytest.fixture
def now():
    """The fixed reference time every test starts at."""
    return NOW


@pytest.fixture
def store():
    """Fresh, empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def sqlite_store(tmp_path):
    """Fresh SQLite record store in a temporary directory."""
    return SQLiteRecordStore(db_path=str(tmp_path / "ward.db"))


@pytest.fixture
def patient_repo(store):
    return PatientRepository(store=store)


@pytest.fixture
def temperature_repo(store):
    return TemperatureRepository(store=store)


@pytest.fixture
def note_repo(store):
    return NoteRepository(store=store)


@pytest.fixture
def patient_service(patient_repo, temperature_repo, clock):
    return PatientService(
        patient_repository=patient_repo,
        temperature_repository=temperature_repo,
        total_beds=74,
        clock=clock,
    )


@pytest.fixture
def observation_service(patient_repo, temperature_repo, note_repo, clock):
    return ObservationService(
        patient_repository=patient_repo,
        temperature_repository=temperature_repo,
        note_repository=note_repo,
        clock=clock,
    )


@pytest.fixture
def ward_service(patient_repo, temperature_repo, clock):
    return WardService(
        patient_repository=patient_repo,
        temperature_repository=temperature_repo,
        total_beds=74,
        clock=clock,
    )


@pytest.fixture
def admit(patient_service):
    """Admit a patient with sensible defaults; keyword arguments override them."""
    counter = {"bed": 0}

    def _admit(**overrides):
        counter["bed"] += 1
        fields = {
            "name": f"Patient {counter['bed']}",
            "age": 40,
            "gender": "Female",
            "bed_number": f"A-{100 + counter['bed']}",
            "condition": "Fever",
        }
        fields.update(overrides)
        return patient_service.admit_patient(**fields)

    return _admit


@pytest.fixture
def add_reading(temperature_repo):
    """Store a reading at an arbitrary time, bypassing the 'taken now' rule."""
    counter = {"n": 0}

    def _add(patient_id: str, value: float, at: datetime, recorded_by: str = "Nurse Joy"):
        counter["n"] += 1
        return temperature_repo.add(TemperatureRecord(
            id=f"r{counter['n']}",
            patient_id=patient_id,
            value=value,
            timestamp=at,
            recorded_by=recorded_by,
        ))

    return _add


@pytest.fixture
def test_app(store, patient_service, observation_service, ward_service):
    """
    FastAPI app with the real routers and test services injected.

    Exception handlers are registered exactly as in production so error
    responses can be asserted on.
    """
    from api.routers import (
        health_router,
        meta_router,
        observations_router,
        patients_router,
        ward_router,
    )

    app = FastAPI(title="Ward Service API Test")
    setup_exception_handlers(app)

    app.dependency_overrides[deps.get_record_store] = lambda: store
    app.dependency_overrides[deps.get_patient_service] = lambda: patient_service
    app.dependency_overrides[deps.get_observation_service] = lambda: observation_service
    app.dependency_overrides[deps.get_ward_service] = lambda: ward_service

    app.include_router(health_router)
    app.include_router(patients_router)
    app.include_router(observations_router)
    app.include_router(ward_router)
    app.include_router(meta_router)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    return TestClient(test_app)
