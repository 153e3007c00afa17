"""
Domain model for temperature observations.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from core.datetime_utils import format_iso, parse_datetime


@dataclass(frozen=True)
class TemperatureRecord:
    """A single body temperature reading in Celsius. Immutable once recorded."""

    id: str
    patient_id: str
    value: float
    timestamp: datetime
    recorded_by: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "patientId": self.patient_id,
            "value": self.value,
            "timestamp": format_iso(self.timestamp),
            "recordedBy": self.recorded_by,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemperatureRecord":
        return cls(
            id=str(data["id"]),
            patient_id=str(data["patientId"]),
            value=float(data["value"]),
            timestamp=parse_datetime(data["timestamp"]),
            recorded_by=data["recordedBy"],
        )
