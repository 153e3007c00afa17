"""
Service layer for ward-level statistics and discharge eligibility.

Loads a fresh snapshot from the repositories on every call and hands it to
the pure functions in services.clinical_rules. Nothing is cached.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List

from core.config import TOTAL_BEDS, FEVER_FREE_DAYS, FEVER_THRESHOLD
from core.datetime_utils import utc_now
from core.exceptions import PatientNotFoundError
from models import TemperatureRecord
from repositories import PatientRepository, TemperatureRepository
from services.clinical_rules import (
    BedStatistics,
    OutcomeStatistics,
    compute_bed_statistics,
    compute_outcome_statistics,
    fever_free_window_start,
    is_fever_free,
    readings_in_window,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DischargeEligibility:
    """Fever-free verdict together with the evidence it was based on."""

    patient_id: str
    eligible: bool
    window_start: datetime
    threshold: float
    window_days: int
    readings: List[TemperatureRecord]


class WardService:
    """Bed and outcome statistics plus the fever-free check."""

    def __init__(
        self,
        patient_repository: PatientRepository,
        temperature_repository: TemperatureRepository,
        total_beds: int = TOTAL_BEDS,
        fever_free_days: int = FEVER_FREE_DAYS,
        fever_threshold: float = FEVER_THRESHOLD,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._patients = patient_repository
        self._temperatures = temperature_repository
        self._total_beds = total_beds
        self._fever_free_days = fever_free_days
        self._fever_threshold = fever_threshold
        self._clock = clock

    def bed_statistics(self) -> BedStatistics:
        return compute_bed_statistics(self._patients.get_all(), total_beds=self._total_beds)

    def outcome_statistics(self) -> OutcomeStatistics:
        return compute_outcome_statistics(self._patients.get_all())

    def _readings(self, patient_id: str) -> List[TemperatureRecord]:
        if not self._patients.exists(patient_id):
            raise PatientNotFoundError(patient_id=patient_id)
        return self._temperatures.get_for_patient(patient_id)

    def is_fever_free(self, patient_id: str) -> bool:
        """
        Whether the patient has been fever-free over the trailing window.

        Raises:
            PatientNotFoundError: If the patient doesn't exist.
        """
        return is_fever_free(
            self._readings(patient_id),
            now=self._clock(),
            window_days=self._fever_free_days,
            threshold=self._fever_threshold,
        )

    def discharge_eligibility(self, patient_id: str) -> DischargeEligibility:
        """
        The fever-free verdict plus the in-window readings behind it.

        Raises:
            PatientNotFoundError: If the patient doesn't exist.
        """
        readings = self._readings(patient_id)
        now = self._clock()
        eligible = is_fever_free(
            readings,
            now=now,
            window_days=self._fever_free_days,
            threshold=self._fever_threshold,
        )
        logger.debug(
            f"Discharge eligibility for patient {patient_id}: {eligible}",
            extra={"patient_id": patient_id, "readings": len(readings)}
        )
        return DischargeEligibility(
            patient_id=patient_id,
            eligible=eligible,
            window_start=fever_free_window_start(now, self._fever_free_days),
            threshold=self._fever_threshold,
            window_days=self._fever_free_days,
            readings=readings_in_window(readings, now, self._fever_free_days),
        )
