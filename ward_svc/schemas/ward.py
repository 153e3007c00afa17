"""
Pydantic schemas for ward statistics and discharge eligibility.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from schemas.observation import TemperatureResponse


class BedStatisticsResponse(BaseModel):
    total: int = Field(..., description="Configured bed capacity")
    occupied: int = Field(..., description="Patients in Active or ReadyForDischarge")
    available: int

    model_config = ConfigDict(from_attributes=True)


class OutcomeStatisticsResponse(BaseModel):
    active: int = Field(..., description="Patients in Active or ReadyForDischarge")
    recovered: int = Field(..., description="Discharged patients")
    deceased: int
    success_rate: int = Field(..., description="Recovered share of closed cases, whole percent")

    model_config = ConfigDict(from_attributes=True)


class DischargeEligibilityResponse(BaseModel):
    patient_id: str
    eligible: bool
    window_start: datetime
    window_days: int
    threshold: float
    readings: List[TemperatureResponse] = Field(
        default_factory=list,
        description="Readings inside the fever-free window, oldest first",
    )

    model_config = ConfigDict(from_attributes=True)
