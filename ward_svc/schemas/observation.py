"""
Pydantic schemas for temperature readings and clinical notes.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TemperatureCreate(BaseModel):
    """Schema for recording a temperature reading.

    The accepted range is enforced by the service so the caller receives a
    domain error explaining the limits.
    """
    value: float = Field(..., description="Reading in degrees Celsius")
    recorded_by: str = Field(..., min_length=1, max_length=200, description="Name of the nurse")

    model_config = ConfigDict(
        json_schema_extra={"example": {"value": 36.8, "recorded_by": "Nurse Joy"}}
    )


class TemperatureResponse(BaseModel):
    id: str
    patient_id: str
    value: float
    timestamp: datetime
    recorded_by: str

    model_config = ConfigDict(from_attributes=True)


class TemperatureTakenTodayResponse(BaseModel):
    patient_id: str
    taken_today: bool


class NoteCreate(BaseModel):
    """Schema for adding a clinical note."""
    note: str = Field(..., max_length=5000, description="Note text")
    doctor_name: str = Field(..., min_length=1, max_length=200, description="Author of the note")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"note": "Afebrile overnight, continue observation.", "doctor_name": "Dr. Grey"}
        }
    )


class NoteResponse(BaseModel):
    id: str
    patient_id: str
    note: str
    timestamp: datetime
    doctor_name: str

    model_config = ConfigDict(from_attributes=True)
