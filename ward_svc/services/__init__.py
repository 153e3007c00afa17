"""
Service layer: mutators, accessors and the clinical rules engine.
"""
from services.patient_service import PatientService
from services.observation_service import ObservationService
from services.ward_service import WardService, DischargeEligibility

__all__ = [
    "PatientService",
    "ObservationService",
    "WardService",
    "DischargeEligibility",
]
