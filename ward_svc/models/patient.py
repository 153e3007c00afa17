"""
Domain model for patients and their lifecycle status.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from core.datetime_utils import format_iso, parse_datetime


class PatientStatus(str, Enum):
    """
    Lifecycle of a ward patient.

    Active -> ReadyForDischarge -> {Discharged | Deceased}
    """

    ACTIVE = "Active"
    READY_FOR_DISCHARGE = "ReadyForDischarge"
    DISCHARGED = "Discharged"
    DECEASED = "Deceased"

    @property
    def occupies_bed(self) -> bool:
        return self in (PatientStatus.ACTIVE, PatientStatus.READY_FOR_DISCHARGE)


@dataclass
class Patient:
    """Model representing a patient admitted to the ward."""

    id: str
    name: str
    age: int
    gender: str
    bed_number: str
    admission_date: datetime
    condition: str
    status: PatientStatus = PatientStatus.ACTIVE
    discharge_approved_date: Optional[datetime] = None
    discharge_completed_date: Optional[datetime] = None

    @property
    def occupies_bed(self) -> bool:
        return self.status.occupies_bed

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the persisted record layout.

        Optional timestamps are omitted while unset.
        """
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "gender": self.gender,
            "bedNumber": self.bed_number,
            "admissionDate": format_iso(self.admission_date),
            "condition": self.condition,
            "status": self.status.value,
        }
        if self.discharge_approved_date is not None:
            data["dischargeApprovedDate"] = format_iso(self.discharge_approved_date)
        if self.discharge_completed_date is not None:
            data["dischargeCompletedDate"] = format_iso(self.discharge_completed_date)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Patient":
        """
        Create a Patient from a persisted record.

        Args:
            data: Record with the keys written by to_dict().

        Returns:
            Patient instance.
        """
        approved = data.get("dischargeApprovedDate")
        completed = data.get("dischargeCompletedDate")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            age=int(data["age"]),
            gender=data["gender"],
            bed_number=data["bedNumber"],
            admission_date=parse_datetime(data["admissionDate"]),
            condition=data["condition"],
            status=PatientStatus(data["status"]),
            discharge_approved_date=parse_datetime(approved) if approved else None,
            discharge_completed_date=parse_datetime(completed) if completed else None,
        )
