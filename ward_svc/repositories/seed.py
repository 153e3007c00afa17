"""
One-time bootstrap of the demonstration dataset.

The dataset is written only when the patient collection has never been
written; once it exists (even empty) the store is left alone.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from core.datetime_utils import utc_now, truncate_to_millis
from models import DoctorNote, Patient, PatientStatus, TemperatureRecord
from repositories.base import NOTES, PATIENTS, TEMPERATURES, RecordStore

logger = logging.getLogger(__name__)

DEMO_NURSE = "Nurse Joy"


def build_demo_patients(now: datetime) -> List[Patient]:
    day = timedelta(days=1)
    return [
        Patient(
            id="1", name="John Doe", age=45, gender="Male", bed_number="A-101",
            admission_date=now - 5 * day, condition="Mild Fever",
        ),
        Patient(
            id="2", name="Jane Smith", age=32, gender="Female", bed_number="A-102",
            admission_date=now - 2 * day, condition="Cough & Fatigue",
        ),
        Patient(
            id="3", name="Robert Brown", age=60, gender="Male", bed_number="B-201",
            admission_date=now - 10 * day, condition="Recovering",
            status=PatientStatus.READY_FOR_DISCHARGE, discharge_approved_date=now,
        ),
    ]


def build_demo_temperatures(now: datetime) -> List[TemperatureRecord]:
    day = timedelta(days=1)
    readings = [
        ("t1", "1", 38.2, 2),
        ("t2", "1", 37.8, 1),
        ("t3", "2", 39.0, 1),
        ("t4", "3", 36.5, 3),
        ("t5", "3", 36.6, 2),
        ("t6", "3", 36.4, 1),
    ]
    return [
        TemperatureRecord(
            id=record_id, patient_id=patient_id, value=value,
            timestamp=now - days_ago * day, recorded_by=DEMO_NURSE,
        )
        for record_id, patient_id, value, days_ago in readings
    ]


def ensure_seeded(store: RecordStore, now: Optional[datetime] = None) -> bool:
    """
    Seed the demonstration dataset if the patient collection is absent.

    The absence check and the three writes happen in one store step, so two
    workers starting together seed at most once.

    Args:
        store: Record store to bootstrap.
        now: Reference time for the relative dates. Defaults to the current time.

    Returns:
        bool: True if the dataset was written, False if the store was already initialised.
    """
    if store.has(PATIENTS):
        return False

    now = truncate_to_millis(now or utc_now())
    patients = build_demo_patients(now)
    temperatures = build_demo_temperatures(now)
    notes: List[DoctorNote] = []

    seeded = store.initialize(
        {
            TEMPERATURES: [t.to_dict() for t in temperatures],
            NOTES: [n.to_dict() for n in notes],
            PATIENTS: [p.to_dict() for p in patients],
        },
        marker=PATIENTS,
    )
    if not seeded:
        logger.info("Patient collection appeared while seeding; left as is")
        return False

    logger.info(
        "Seeded demonstration dataset",
        extra={"patients": len(patients), "temperatures": len(temperatures), "notes": len(notes)}
    )
    return True
