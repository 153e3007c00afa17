"""
Observations router - temperature readings and clinical notes per patient.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.dependencies import get_observation_service
from core.exceptions import TemperatureNotFoundError
from schemas import (
    NoteCreate,
    NoteResponse,
    TemperatureCreate,
    TemperatureResponse,
    TemperatureTakenTodayResponse,
)
from services import ObservationService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/patients/{patient_id}",
    tags=["Observations"],
)

MAX_READINGS_LIMIT = 1000


# =============================================================================
# TEMPERATURES
# =============================================================================

@router.post(
    "/temperatures",
    response_model=TemperatureResponse,
    status_code=201,
    summary="Record a temperature",
    description="Record a reading taken now. Values outside the accepted range return 400."
)
async def record_temperature(
    patient_id: str,
    payload: TemperatureCreate,
    observation_service: ObservationService = Depends(get_observation_service)
):
    return observation_service.record_temperature(patient_id, payload.value, payload.recorded_by)


@router.get(
    "/temperatures",
    response_model=List[TemperatureResponse],
    summary="List temperatures",
    description="Readings oldest first. `limit` keeps only the most recent N."
)
async def list_temperatures(
    patient_id: str,
    limit: Optional[int] = Query(None, ge=1, le=MAX_READINGS_LIMIT, examples=[14]),
    observation_service: ObservationService = Depends(get_observation_service)
):
    return observation_service.list_temperatures(patient_id, limit=limit)


@router.get(
    "/temperatures/latest",
    response_model=TemperatureResponse,
    summary="Latest temperature",
)
async def latest_temperature(
    patient_id: str,
    observation_service: ObservationService = Depends(get_observation_service)
):
    latest = observation_service.latest_temperature(patient_id)
    if latest is None:
        raise TemperatureNotFoundError(patient_id=patient_id)
    return latest


@router.get(
    "/temperatures/today",
    response_model=TemperatureTakenTodayResponse,
    summary="Whether today's reading has been taken",
)
async def temperature_taken_today(
    patient_id: str,
    observation_service: ObservationService = Depends(get_observation_service)
):
    return TemperatureTakenTodayResponse(
        patient_id=patient_id,
        taken_today=observation_service.temperature_taken_today(patient_id),
    )


# =============================================================================
# NOTES
# =============================================================================

@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=201,
    summary="Add a clinical note",
)
async def add_note(
    patient_id: str,
    payload: NoteCreate,
    observation_service: ObservationService = Depends(get_observation_service)
):
    return observation_service.add_note(patient_id, payload.note, payload.doctor_name)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    summary="List clinical notes",
    description="Notes newest first."
)
async def list_notes(
    patient_id: str,
    observation_service: ObservationService = Depends(get_observation_service)
):
    return observation_service.list_notes(patient_id)
