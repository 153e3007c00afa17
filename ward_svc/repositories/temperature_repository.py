"""
Repository for temperature observations.

Records are append-only. Reads filter the full collection to one patient and
return it in chronological order.
"""
import logging
from typing import List, Optional

from models import TemperatureRecord
from repositories.base import TEMPERATURES, RecordStore, to_models

logger = logging.getLogger(__name__)


class TemperatureRepository:
    """Accessors and append operation for the temperature collection."""

    def __init__(self, store: RecordStore):
        self._store = store

    def new_id(self) -> str:
        return self._store.new_id()

    def add(self, record: TemperatureRecord) -> TemperatureRecord:
        self._store.update(TEMPERATURES, lambda records: records + [record.to_dict()])
        return record

    def get_all(self) -> List[TemperatureRecord]:
        """Every reading for every patient, in insertion order."""
        return to_models(TEMPERATURES, self._store.load(TEMPERATURES), TemperatureRecord.from_dict)

    def get_for_patient(self, patient_id: str) -> List[TemperatureRecord]:
        """
        Get a patient's readings, oldest first.

        The sort is stable, so readings sharing a timestamp keep insertion order.
        """
        readings = [t for t in self.get_all() if t.patient_id == patient_id]
        return sorted(readings, key=lambda t: t.timestamp)

    def get_latest(self, patient_id: str) -> Optional[TemperatureRecord]:
        readings = self.get_for_patient(patient_id)
        return readings[-1] if readings else None
