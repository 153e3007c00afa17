"""
Domain model for clinical notes.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from core.datetime_utils import format_iso, parse_datetime


@dataclass(frozen=True)
class DoctorNote:
    """Free-text clinical note written by a doctor. Immutable once written."""

    id: str
    patient_id: str
    note: str
    timestamp: datetime
    doctor_name: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "patientId": self.patient_id,
            "note": self.note,
            "timestamp": format_iso(self.timestamp),
            "doctorName": self.doctor_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DoctorNote":
        return cls(
            id=str(data["id"]),
            patient_id=str(data["patientId"]),
            note=data["note"],
            timestamp=parse_datetime(data["timestamp"]),
            doctor_name=data["doctorName"],
        )
