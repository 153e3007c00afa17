"""
Pydantic schemas for patient-related API operations.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models import PatientStatus


class PatientCreate(BaseModel):
    """Schema for admitting a new patient.

    The patient is created as Active. The bed must not be held by another
    Active or ReadyForDischarge patient.
    """
    name: str = Field(..., min_length=1, max_length=200, description="Patient full name")
    age: int = Field(..., gt=0, le=150, description="Age in whole years")
    gender: str = Field(..., max_length=50, description="Gender (free text)")
    bed_number: str = Field(..., min_length=1, max_length=50, description="Bed label, e.g. 'A-101'")
    condition: str = Field(..., max_length=500, description="Presenting condition (free text)")
    admission_date: Optional[datetime] = Field(
        None,
        description="Admission time (ISO 8601). Defaults to now.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "John Doe",
                "age": 45,
                "gender": "Male",
                "bed_number": "A-101",
                "condition": "Mild Fever",
            }
        }
    )


class PatientResponse(BaseModel):
    """Schema for patient response."""
    id: str = Field(..., description="Unique patient identifier")
    name: str
    age: int
    gender: str
    bed_number: str
    admission_date: datetime
    condition: str
    status: PatientStatus
    discharge_approved_date: Optional[datetime] = None
    discharge_completed_date: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PatientStatusUpdate(BaseModel):
    """Schema for a status change request."""
    status: PatientStatus = Field(..., description="Requested status")

    model_config = ConfigDict(
        json_schema_extra={"example": {"status": "Discharged"}}
    )
