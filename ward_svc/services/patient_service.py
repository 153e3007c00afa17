"""
Service layer for patient admission and status changes.

Architecture:
    API Layer (routers) → PatientService → PatientRepository → RecordStore

Dependency Injection:
    PatientService receives its repositories via constructor injection.
    Use core.dependencies.get_patient_service() in routers with Depends().
"""
import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from core.config import TOTAL_BEDS, FEVER_FREE_DAYS, FEVER_THRESHOLD
from core.datetime_utils import utc_now, truncate_to_millis
from core.exceptions import (
    BedOccupiedError,
    DischargeNotEligibleError,
    InvalidPatientDataError,
    InvalidStatusTransitionError,
    PatientNotFoundError,
    WardFullError,
)
from models import Patient, PatientStatus
from repositories import PatientRepository, TemperatureRepository
from services import clinical_rules

logger = logging.getLogger(__name__)


class PatientService:
    """
    Admits patients and moves them through their lifecycle.

    Every status change is checked against the transition table in
    clinical_rules before anything is written.
    """

    def __init__(
        self,
        patient_repository: PatientRepository,
        temperature_repository: TemperatureRepository,
        total_beds: int = TOTAL_BEDS,
        fever_free_days: int = FEVER_FREE_DAYS,
        fever_threshold: float = FEVER_THRESHOLD,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the patient service.

        Args:
            patient_repository: Patient data access.
            temperature_repository: Readings used by the discharge approval check.
            total_beds: Ward capacity.
            fever_free_days: Length of the fever-free window in days.
            fever_threshold: Readings at or above this value count as fever.
            clock: Source of the current time.
        """
        self._repo = patient_repository
        self._temperatures = temperature_repository
        self._total_beds = total_beds
        self._fever_free_days = fever_free_days
        self._fever_threshold = fever_threshold
        self._clock = clock

    def _now(self) -> datetime:
        return truncate_to_millis(self._clock())

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def get_patients(self, statuses: Optional[Iterable[PatientStatus]] = None) -> List[Patient]:
        """All patients in admission order, optionally filtered by status."""
        return self._repo.get_all(statuses=statuses)

    def get_patient(self, patient_id: str) -> Patient:
        """
        Get a patient by id.

        Raises:
            PatientNotFoundError: If no patient has this id.
        """
        patient = self._repo.get_by_id(patient_id)
        if patient is None:
            raise PatientNotFoundError(patient_id=patient_id)
        return patient

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def admit_patient(
        self,
        name: str,
        age: int,
        gender: str,
        bed_number: str,
        condition: str,
        admission_date: Optional[datetime] = None,
    ) -> Patient:
        """
        Admit a new patient as Active.

        Args:
            name: Patient's full name.
            age: Age in whole years, must be positive.
            gender: Free text.
            bed_number: Bed label; must not be held by another occupying patient.
            condition: Free-text presenting condition.
            admission_date: Defaults to now.

        Returns:
            Patient: The admitted patient with its generated id.

        Raises:
            InvalidPatientDataError: Blank name or bed number, or non-positive age.
            WardFullError: No beds available.
            BedOccupiedError: The bed is taken.
        """
        name = (name or "").strip()
        bed_number = (bed_number or "").strip()
        if not name:
            raise InvalidPatientDataError(detail="Patient name is required", field="name")
        if not bed_number:
            raise InvalidPatientDataError(detail="Bed number is required", field="bed_number")
        if isinstance(age, bool) or not isinstance(age, int) or age <= 0:
            raise InvalidPatientDataError(detail="Age must be a positive whole number", field="age", age=age)

        patient = Patient(
            id=self._repo.new_id(),
            name=name,
            age=age,
            gender=gender,
            bed_number=bed_number,
            admission_date=truncate_to_millis(admission_date) if admission_date else self._now(),
            condition=condition,
            status=PatientStatus.ACTIVE,
        )

        def check_capacity(current: List[Patient]) -> None:
            occupying = [p for p in current if p.occupies_bed]
            if len(occupying) >= self._total_beds:
                logger.warning("Admission rejected, ward is full", extra={"total_beds": self._total_beds})
                raise WardFullError(total_beds=self._total_beds)
            if any(p.bed_number == bed_number for p in occupying):
                logger.warning("Admission rejected, bed occupied", extra={"bed_number": bed_number})
                raise BedOccupiedError(bed_number=bed_number)

        self._repo.add(patient, check=check_capacity)
        logger.info(
            f"Patient admitted: {patient.name} (id={patient.id})",
            extra={"patient_id": patient.id, "bed_number": patient.bed_number}
        )
        return patient

    def set_patient_status(self, patient_id: str, new_status: PatientStatus) -> Patient:
        """
        Move a patient to a new status.

        Stamps discharge_approved_date on ReadyForDischarge and
        discharge_completed_date on Discharged or Deceased.

        Raises:
            PatientNotFoundError: If no patient has this id.
            InvalidStatusTransitionError: If the edge is not in the transition table.
        """
        new_status = PatientStatus(new_status)
        now = self._now()

        def change(patient: Patient) -> Patient:
            if not clinical_rules.is_transition_allowed(patient.status, new_status):
                raise InvalidStatusTransitionError(
                    current_status=patient.status.value,
                    requested_status=new_status.value,
                    patient_id=patient.id,
                )
            patient.status = new_status
            if new_status is PatientStatus.READY_FOR_DISCHARGE:
                patient.discharge_approved_date = now
            if new_status in (PatientStatus.DISCHARGED, PatientStatus.DECEASED):
                patient.discharge_completed_date = now
            return patient

        try:
            updated = self._repo.update(patient_id, change)
        except InvalidStatusTransitionError as e:
            logger.warning(f"Rejected status change for patient {patient_id}: {e.detail}")
            raise

        if updated is None:
            logger.warning(f"Status change for unknown patient: {patient_id}")
            raise PatientNotFoundError(patient_id=patient_id)

        logger.info(
            f"Patient {patient_id} status set to {new_status.value}",
            extra={"patient_id": patient_id, "status": new_status.value}
        )
        return updated

    def approve_discharge(self, patient_id: str) -> Patient:
        """
        Approve discharge for a fever-free patient (Active -> ReadyForDischarge).

        Raises:
            PatientNotFoundError: If no patient has this id.
            DischargeNotEligibleError: If the patient is not fever-free.
            InvalidStatusTransitionError: If the patient is not Active.
        """
        patient = self.get_patient(patient_id)
        readings = self._temperatures.get_for_patient(patient.id)
        eligible = clinical_rules.is_fever_free(
            readings,
            now=self._clock(),
            window_days=self._fever_free_days,
            threshold=self._fever_threshold,
        )
        if not eligible:
            logger.warning(f"Discharge approval refused for patient {patient_id}: not fever-free")
            raise DischargeNotEligibleError(
                detail=f"Patient '{patient_id}' does not meet the {self._fever_free_days}-day fever-free criteria",
                patient_id=patient_id,
            )
        return self.set_patient_status(patient_id, PatientStatus.READY_FOR_DISCHARGE)
