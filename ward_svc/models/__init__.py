"""
Domain models for the ward service.
"""
from models.patient import Patient, PatientStatus
from models.temperature_record import TemperatureRecord
from models.doctor_note import DoctorNote

__all__ = [
    "Patient",
    "PatientStatus",
    "TemperatureRecord",
    "DoctorNote",
]
