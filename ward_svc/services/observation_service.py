"""
Service layer for bedside observations: temperature readings and clinical notes.

Architecture:
    API Layer (routers) → ObservationService → Repositories → RecordStore
"""
import logging
import math
from datetime import datetime
from typing import Callable, List, Optional

from core.config import MIN_TEMPERATURE, MAX_TEMPERATURE
from core.datetime_utils import utc_now, truncate_to_millis
from core.exceptions import InvalidObservationError, PatientNotFoundError
from models import DoctorNote, TemperatureRecord
from repositories import NoteRepository, PatientRepository, TemperatureRepository

logger = logging.getLogger(__name__)


class ObservationService:
    """
    Records and reads temperatures and notes for existing patients.

    Readings outside the accepted range and blank notes are rejected before
    anything is written.
    """

    def __init__(
        self,
        patient_repository: PatientRepository,
        temperature_repository: TemperatureRepository,
        note_repository: NoteRepository,
        min_temperature: float = MIN_TEMPERATURE,
        max_temperature: float = MAX_TEMPERATURE,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._patients = patient_repository
        self._temperatures = temperature_repository
        self._notes = note_repository
        self._min_temperature = min_temperature
        self._max_temperature = max_temperature
        self._clock = clock

    def _require_patient(self, patient_id: str) -> None:
        if not self._patients.exists(patient_id):
            logger.warning(f"Patient not found: {patient_id}")
            raise PatientNotFoundError(patient_id=patient_id)

    # -------------------------------------------------------------------------
    # Temperatures
    # -------------------------------------------------------------------------

    def record_temperature(self, patient_id: str, value: float, recorded_by: str) -> TemperatureRecord:
        """
        Record a temperature reading taken now.

        Args:
            patient_id: Patient the reading belongs to.
            value: Reading in Celsius, within the accepted range (inclusive).
            recorded_by: Name of the nurse taking the reading.

        Returns:
            TemperatureRecord: The stored reading.

        Raises:
            InvalidObservationError: If the value is not a finite number in range.
            PatientNotFoundError: If the patient doesn't exist.
        """
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InvalidObservationError(detail="Temperature must be a number", value=value) from None

        if math.isnan(value) or not self._min_temperature <= value <= self._max_temperature:
            raise InvalidObservationError(
                detail=(
                    f"Temperature must be between {self._min_temperature:g} "
                    f"and {self._max_temperature:g} °C"
                ),
                value=value,
            )

        self._require_patient(patient_id)

        record = TemperatureRecord(
            id=self._temperatures.new_id(),
            patient_id=patient_id,
            value=value,
            timestamp=truncate_to_millis(self._clock()),
            recorded_by=recorded_by,
        )
        self._temperatures.add(record)
        logger.info(
            f"Temperature recorded for patient {patient_id}: {value}",
            extra={"patient_id": patient_id, "value": value, "recorded_by": recorded_by}
        )
        return record

    def list_temperatures(self, patient_id: str, limit: Optional[int] = None) -> List[TemperatureRecord]:
        """
        A patient's readings, oldest first.

        Args:
            limit: Keep only the most recent N readings (still oldest first).
        """
        self._require_patient(patient_id)
        readings = self._temperatures.get_for_patient(patient_id)
        if limit is not None:
            readings = readings[-limit:] if limit > 0 else []
        return readings

    def latest_temperature(self, patient_id: str) -> Optional[TemperatureRecord]:
        self._require_patient(patient_id)
        return self._temperatures.get_latest(patient_id)

    def temperature_taken_today(self, patient_id: str) -> bool:
        """Whether the latest reading falls on the current UTC calendar day."""
        latest = self.latest_temperature(patient_id)
        if latest is None:
            return False
        return latest.timestamp.date() == self._clock().date()

    # -------------------------------------------------------------------------
    # Notes
    # -------------------------------------------------------------------------

    def add_note(self, patient_id: str, text: str, doctor_name: str) -> DoctorNote:
        """
        Add a clinical note written now.

        Raises:
            InvalidObservationError: If the note is blank.
            PatientNotFoundError: If the patient doesn't exist.
        """
        if not text or not text.strip():
            raise InvalidObservationError(detail="Note text is required")

        self._require_patient(patient_id)

        note = DoctorNote(
            id=self._notes.new_id(),
            patient_id=patient_id,
            note=text,
            timestamp=truncate_to_millis(self._clock()),
            doctor_name=doctor_name,
        )
        self._notes.add(note)
        logger.info(f"Note added for patient {patient_id} by {doctor_name}")
        return note

    def list_notes(self, patient_id: str) -> List[DoctorNote]:
        """A patient's notes, newest first."""
        self._require_patient(patient_id)
        return self._notes.get_for_patient(patient_id)
