"""
Repository for clinical notes. Append-only; reads are newest first.
"""
import logging
from typing import List

from models import DoctorNote
from repositories.base import NOTES, RecordStore, to_models

logger = logging.getLogger(__name__)


class NoteRepository:
    """Accessors and append operation for the notes collection."""

    def __init__(self, store: RecordStore):
        self._store = store

    def new_id(self) -> str:
        return self._store.new_id()

    def add(self, note: DoctorNote) -> DoctorNote:
        self._store.update(NOTES, lambda records: records + [note.to_dict()])
        return note

    def get_for_patient(self, patient_id: str) -> List[DoctorNote]:
        notes = [
            n for n in to_models(NOTES, self._store.load(NOTES), DoctorNote.from_dict)
            if n.patient_id == patient_id
        ]
        return sorted(notes, key=lambda n: n.timestamp, reverse=True)
