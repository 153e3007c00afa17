"""
Repository for patient records.

Architecture:
    PatientRepository is the data access layer for patients.
    It should be injected via core.dependencies.get_patient_repository().

Every call re-reads the patient collection from the record store; nothing is
cached between calls.
"""
import logging
from typing import Callable, Iterable, List, Optional

from models import Patient, PatientStatus
from repositories.base import PATIENTS, RecordStore, to_models

logger = logging.getLogger(__name__)


class PatientRepository:
    """Accessors and write-through operations for the patient collection."""

    def __init__(self, store: RecordStore):
        """
        Args:
            store: Record store holding the patient collection.
        """
        self._store = store

    def new_id(self) -> str:
        return self._store.new_id()

    def get_all(self, statuses: Optional[Iterable[PatientStatus]] = None) -> List[Patient]:
        """
        Get all patients in insertion order.

        Args:
            statuses: Only return patients in one of these statuses (optional).
        """
        patients = to_models(PATIENTS, self._store.load(PATIENTS), Patient.from_dict)
        if statuses is not None:
            wanted = set(statuses)
            patients = [p for p in patients if p.status in wanted]
        return patients

    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        for patient in self.get_all():
            if patient.id == patient_id:
                return patient
        return None

    def exists(self, patient_id: str) -> bool:
        return self.get_by_id(patient_id) is not None

    def add(self, patient: Patient, check: Optional[Callable[[List[Patient]], None]] = None) -> Patient:
        """
        Append a patient to the collection.

        Args:
            patient: The patient to store.
            check: Called with the current snapshot inside the write, before
                the append; raising from it aborts the write.

        Returns:
            Patient: The stored patient.
        """
        def append(records):
            if check is not None:
                check(to_models(PATIENTS, records, Patient.from_dict))
            return records + [patient.to_dict()]

        self._store.update(PATIENTS, append)
        return patient

    def update(
        self,
        patient_id: str,
        change: Callable[[Patient], Patient],
    ) -> Optional[Patient]:
        """
        Replace a single patient with change(patient), in place.

        Returns:
            The updated patient, or None if no patient has this id (the collection is left unchanged).
        """
        updated: List[Patient] = []

        def apply(records):
            for index, current in enumerate(to_models(PATIENTS, records, Patient.from_dict)):
                if current.id == patient_id:
                    patient = change(current)
                    updated.append(patient)
                    return records[:index] + [patient.to_dict()] + records[index + 1:]
            return records

        self._store.update(PATIENTS, apply)
        return updated[0] if updated else None
