"""
Patients router - admission, lookup and lifecycle endpoints.

Architecture:
    HTTP Request → Router (this file) → PatientService / WardService → Repositories → RecordStore

Domain errors (PatientNotFoundError, InvalidStatusTransitionError, ...) are
raised by the services and converted to JSON responses by the handlers
registered in setup_exception_handlers().
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.dependencies import get_patient_service, get_ward_service
from models import PatientStatus
from schemas import (
    DischargeEligibilityResponse,
    PatientCreate,
    PatientResponse,
    PatientStatusUpdate,
)
from services import PatientService, WardService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/patients",
    tags=["Patients"],
)


@router.post(
    "",
    response_model=PatientResponse,
    status_code=201,
    summary="Admit a patient",
    description="Admit a new patient as Active. Returns 409 if the ward is full or the bed is taken."
)
async def admit_patient(
    payload: PatientCreate,
    patient_service: PatientService = Depends(get_patient_service)
):
    return patient_service.admit_patient(
        name=payload.name,
        age=payload.age,
        gender=payload.gender,
        bed_number=payload.bed_number,
        condition=payload.condition,
        admission_date=payload.admission_date,
    )


@router.get(
    "",
    response_model=List[PatientResponse],
    summary="List patients",
    description="All patients in admission order. Repeat `status` to filter on several statuses, "
                "e.g. `?status=ReadyForDischarge` for the discharge queue."
)
async def list_patients(
    status: Optional[List[PatientStatus]] = Query(None, description="Only patients in these statuses"),
    patient_service: PatientService = Depends(get_patient_service)
):
    return patient_service.get_patients(statuses=status)


@router.get(
    "/{patient_id}",
    response_model=PatientResponse,
    summary="Get a patient",
)
async def get_patient(
    patient_id: str,
    patient_service: PatientService = Depends(get_patient_service)
):
    return patient_service.get_patient(patient_id)


@router.put(
    "/{patient_id}/status",
    response_model=PatientResponse,
    summary="Change a patient's status",
    description="Allowed: Active → ReadyForDischarge | Deceased, "
                "ReadyForDischarge → Discharged | Deceased. Anything else returns 409."
)
async def set_patient_status(
    patient_id: str,
    payload: PatientStatusUpdate,
    patient_service: PatientService = Depends(get_patient_service)
):
    return patient_service.set_patient_status(patient_id, payload.status)


@router.post(
    "/{patient_id}/discharge-approval",
    response_model=PatientResponse,
    summary="Approve discharge",
    description="Moves a fever-free Active patient to ReadyForDischarge. Returns 409 if not fever-free."
)
async def approve_discharge(
    patient_id: str,
    patient_service: PatientService = Depends(get_patient_service)
):
    return patient_service.approve_discharge(patient_id)


@router.get(
    "/{patient_id}/discharge-eligibility",
    response_model=DischargeEligibilityResponse,
    summary="Fever-free discharge eligibility",
)
async def discharge_eligibility(
    patient_id: str,
    ward_service: WardService = Depends(get_ward_service)
):
    eligibility = ward_service.discharge_eligibility(patient_id)
    return DischargeEligibilityResponse.model_validate(eligibility, from_attributes=True)
