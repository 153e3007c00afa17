"""
Clinical rules engine.

Pure functions over a snapshot of the ward: bed accounting, outcome
statistics, the fever-free discharge predicate and the patient status
transition table. Nothing here touches the record store; WardService and
PatientService load the snapshot and pass it in.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, FrozenSet, Iterable, List, Sequence

from models import Patient, PatientStatus, TemperatureRecord

DEFAULT_TOTAL_BEDS = 74
DEFAULT_FEVER_THRESHOLD = 37.5
DEFAULT_FEVER_FREE_DAYS = 3


# =============================================================================
# STATUS TRANSITIONS
# =============================================================================

# Allowed edges of the patient state machine. Terminal states have none.
ALLOWED_TRANSITIONS: Dict[PatientStatus, FrozenSet[PatientStatus]] = {
    PatientStatus.ACTIVE: frozenset({
        PatientStatus.READY_FOR_DISCHARGE,
        PatientStatus.DECEASED,
    }),
    PatientStatus.READY_FOR_DISCHARGE: frozenset({
        PatientStatus.DISCHARGED,
        PatientStatus.DECEASED,
    }),
    PatientStatus.DISCHARGED: frozenset(),
    PatientStatus.DECEASED: frozenset(),
}


def is_transition_allowed(current: PatientStatus, requested: PatientStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS[current]


# =============================================================================
# STATISTICS
# =============================================================================

@dataclass(frozen=True)
class BedStatistics:
    total: int
    occupied: int
    available: int


@dataclass(frozen=True)
class OutcomeStatistics:
    active: int
    recovered: int
    deceased: int
    success_rate: int


def count_occupied(patients: Iterable[Patient]) -> int:
    return sum(1 for p in patients if p.status.occupies_bed)


def compute_bed_statistics(patients: Iterable[Patient], total_beds: int = DEFAULT_TOTAL_BEDS) -> BedStatistics:
    """
    Bed occupancy for a patient snapshot.

    A bed is occupied by every patient in Active or ReadyForDischarge.
    """
    occupied = count_occupied(patients)
    return BedStatistics(total=total_beds, occupied=occupied, available=total_beds - occupied)


def success_rate(recovered: int, deceased: int) -> int:
    """
    Recovered share of closed cases as a whole percentage.

    Halves round up (2 of 3 -> 67, 1 of 8 -> 13). Zero closed cases yields 0.
    """
    closed = recovered + deceased
    if closed == 0:
        return 0
    # Integer form of floor(recovered * 100 / closed + 0.5)
    return (recovered * 200 + closed) // (2 * closed)


def compute_outcome_statistics(patients: Iterable[Patient]) -> OutcomeStatistics:
    """Counts of open and closed cases plus the success rate."""
    active = recovered = deceased = 0
    for patient in patients:
        if patient.status.occupies_bed:
            active += 1
        elif patient.status is PatientStatus.DISCHARGED:
            recovered += 1
        elif patient.status is PatientStatus.DECEASED:
            deceased += 1
    return OutcomeStatistics(
        active=active,
        recovered=recovered,
        deceased=deceased,
        success_rate=success_rate(recovered, deceased),
    )


# =============================================================================
# FEVER-FREE DISCHARGE ELIGIBILITY
# =============================================================================

def fever_free_window_start(now: datetime, window_days: int = DEFAULT_FEVER_FREE_DAYS) -> datetime:
    return now - timedelta(days=window_days)


def readings_in_window(
    temperatures: Sequence[TemperatureRecord],
    now: datetime,
    window_days: int = DEFAULT_FEVER_FREE_DAYS,
) -> List[TemperatureRecord]:
    """Readings taken at or after the start of the trailing window."""
    start = fever_free_window_start(now, window_days)
    return [t for t in temperatures if t.timestamp >= start]


def is_fever_free(
    temperatures: Sequence[TemperatureRecord],
    now: datetime,
    window_days: int = DEFAULT_FEVER_FREE_DAYS,
    threshold: float = DEFAULT_FEVER_THRESHOLD,
) -> bool:
    """
    Whether a patient's readings clear them for discharge.

    False when the patient has no readings at all, and false when none fall
    inside the trailing window: missing recent data never counts as
    fever-free. Otherwise true iff every reading in the window is strictly
    below the threshold. A single in-window reading is enough.
    """
    if not temperatures:
        return False

    recent = readings_in_window(temperatures, now, window_days)
    if not recent:
        return False

    return all(t.value < threshold for t in recent)
