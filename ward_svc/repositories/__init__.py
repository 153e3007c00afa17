"""
Repository layer: the record store and the accessors over its collections.
"""
from repositories.base import (
    RecordStore,
    SQLiteRecordStore,
    InMemoryRecordStore,
    PATIENTS,
    TEMPERATURES,
    NOTES,
    COLLECTIONS,
)
from repositories.patient_repository import PatientRepository
from repositories.temperature_repository import TemperatureRepository
from repositories.note_repository import NoteRepository
from repositories.seed import ensure_seeded

__all__ = [
    "RecordStore",
    "SQLiteRecordStore",
    "InMemoryRecordStore",
    "PATIENTS",
    "TEMPERATURES",
    "NOTES",
    "COLLECTIONS",
    "PatientRepository",
    "TemperatureRepository",
    "NoteRepository",
    "ensure_seeded",
]
