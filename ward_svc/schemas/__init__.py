"""
Pydantic schemas for API request/response validation.

This module contains all Pydantic models used at API boundaries.
"""
from schemas.patient import PatientCreate, PatientResponse, PatientStatusUpdate
from schemas.observation import (
    TemperatureCreate,
    TemperatureResponse,
    TemperatureTakenTodayResponse,
    NoteCreate,
    NoteResponse,
)
from schemas.ward import (
    BedStatisticsResponse,
    OutcomeStatisticsResponse,
    DischargeEligibilityResponse,
)

__all__ = [
    # Patient schemas
    "PatientCreate",
    "PatientResponse",
    "PatientStatusUpdate",
    # Observation schemas
    "TemperatureCreate",
    "TemperatureResponse",
    "TemperatureTakenTodayResponse",
    "NoteCreate",
    "NoteResponse",
    # Ward schemas
    "BedStatisticsResponse",
    "OutcomeStatisticsResponse",
    "DischargeEligibilityResponse",
]
