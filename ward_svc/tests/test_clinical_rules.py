"""
Tests for the pure clinical rules: bed and outcome statistics, the
fever-free predicate and the status transition table.
"""
from datetime import timedelta

import pytest

from models import Patient, PatientStatus, TemperatureRecord
from services import clinical_rules
from services.clinical_rules import (
    compute_bed_statistics,
    compute_outcome_statistics,
    is_fever_free,
    is_transition_allowed,
    readings_in_window,
    success_rate,
)


def make_patient(pid, status, now):
    return Patient(
        id=pid,
        name=f"Patient {pid}",
        age=50,
        gender="Male",
        bed_number=f"B-{pid}",
        admission_date=now - timedelta(days=4),
        condition="Fever",
        status=status,
    )


def make_reading(value, at, pid="1"):
    return TemperatureRecord(id=f"{pid}-{at.isoformat()}", patient_id=pid, value=value, timestamp=at, recorded_by="Nurse Joy")


def ward(now, active=0, ready=0, discharged=0, deceased=0):
    counts = [
        (PatientStatus.ACTIVE, active),
        (PatientStatus.READY_FOR_DISCHARGE, ready),
        (PatientStatus.DISCHARGED, discharged),
        (PatientStatus.DECEASED, deceased),
    ]
    patients = []
    for status, count in counts:
        for _ in range(count):
            patients.append(make_patient(str(len(patients) + 1), status, now))
    return patients


# =============================================================================
# BED STATISTICS
# =============================================================================

def test_bed_statistics_empty_ward(now):
    stats = compute_bed_statistics([], total_beds=74)
    assert (stats.total, stats.occupied, stats.available) == (74, 0, 74)


def test_bed_statistics_counts_active_and_ready(now):
    patients = ward(now, active=2, ready=1, discharged=4, deceased=1)
    stats = compute_bed_statistics(patients, total_beds=74)
    assert stats.occupied == 3
    assert stats.available == 71


def test_bed_statistics_occupied_plus_available_is_total(now):
    for occupied in (0, 1, 37, 74):
        stats = compute_bed_statistics(ward(now, active=occupied, discharged=3), total_beds=74)
        assert stats.occupied + stats.available == stats.total


def test_bed_statistics_uses_configured_capacity(now):
    stats = compute_bed_statistics(ward(now, active=2), total_beds=10)
    assert (stats.total, stats.available) == (10, 8)


# =============================================================================
# OUTCOME STATISTICS
# =============================================================================

@pytest.mark.parametrize("recovered,deceased,expected", [
    (0, 0, 0),
    (1, 0, 100),
    (0, 1, 0),
    (2, 1, 67),
    (1, 2, 33),
    (1, 1, 50),
    (1, 7, 13),   # 12.5 rounds up
    (7, 1, 88),   # 87.5 rounds up
    (3, 5, 38),   # 37.5 rounds up
])
def test_success_rate_rounding(recovered, deceased, expected):
    assert success_rate(recovered, deceased) == expected


def test_success_rate_is_a_percentage():
    for recovered in range(0, 12):
        for deceased in range(0, 12):
            assert 0 <= success_rate(recovered, deceased) <= 100


def test_outcome_statistics_counts(now):
    stats = compute_outcome_statistics(ward(now, active=1, ready=1, discharged=2, deceased=1))
    assert stats.active == 2
    assert stats.recovered == 2
    assert stats.deceased == 1
    assert stats.success_rate == 67


def test_outcome_statistics_without_closed_cases(now):
    stats = compute_outcome_statistics(ward(now, active=3))
    assert stats.success_rate == 0
    assert stats.active == 3


def test_active_outcomes_match_occupied_beds(now):
    patients = ward(now, active=4, ready=2, discharged=5, deceased=3)
    assert compute_outcome_statistics(patients).active == compute_bed_statistics(patients).occupied


# =============================================================================
# FEVER-FREE PREDICATE
# =============================================================================

def test_no_readings_is_not_fever_free(now):
    assert is_fever_free([], now=now) is False


def test_only_old_readings_is_not_fever_free(now):
    readings = [make_reading(36.5, now - timedelta(days=5)), make_reading(36.6, now - timedelta(days=4))]
    assert is_fever_free(readings, now=now) is False


def test_old_fever_with_recent_normal_readings_is_fever_free(now):
    readings = [
        make_reading(38.0, now - timedelta(days=4)),
        make_reading(37.0, now - timedelta(days=2)),
        make_reading(36.5, now - timedelta(days=1)),
    ]
    assert is_fever_free(readings, now=now) is True


def test_recent_fever_is_not_fever_free(now):
    assert is_fever_free([make_reading(38.0, now - timedelta(days=1))], now=now) is False


def test_single_recent_normal_reading_is_enough(now):
    assert is_fever_free([make_reading(36.9, now)], now=now) is True


def test_threshold_is_exclusive(now):
    assert is_fever_free([make_reading(37.5, now)], now=now) is False
    assert is_fever_free([make_reading(37.49, now)], now=now) is True


def test_reading_exactly_at_window_start_counts(now):
    readings = [
        make_reading(38.0, now - timedelta(days=3)),
        make_reading(36.5, now - timedelta(hours=1)),
    ]
    assert is_fever_free(readings, now=now) is False


def test_reading_just_before_window_start_is_ignored(now):
    readings = [
        make_reading(38.0, now - timedelta(days=3, milliseconds=1)),
        make_reading(36.5, now - timedelta(hours=1)),
    ]
    assert is_fever_free(readings, now=now) is True


def test_one_fever_among_many_normal_readings(now):
    readings = [make_reading(36.5, now - timedelta(hours=h)) for h in range(1, 60, 6)]
    readings.append(make_reading(37.6, now - timedelta(hours=30)))
    assert is_fever_free(readings, now=now) is False


def test_custom_window_and_threshold(now):
    readings = [make_reading(37.8, now - timedelta(days=2)), make_reading(37.2, now)]
    assert is_fever_free(readings, now=now, window_days=1) is True
    assert is_fever_free(readings, now=now, window_days=3) is False
    assert is_fever_free(readings, now=now, window_days=3, threshold=38.0) is True


def test_readings_in_window_keeps_order(now):
    readings = [
        make_reading(36.1, now - timedelta(days=5)),
        make_reading(36.2, now - timedelta(days=2)),
        make_reading(36.3, now - timedelta(days=1)),
    ]
    assert [r.value for r in readings_in_window(readings, now)] == [36.2, 36.3]


def test_window_start(now):
    assert clinical_rules.fever_free_window_start(now, 3) == now - timedelta(days=3)


# =============================================================================
# STATUS TRANSITIONS
# =============================================================================

ALLOWED = {
    (PatientStatus.ACTIVE, PatientStatus.READY_FOR_DISCHARGE),
    (PatientStatus.ACTIVE, PatientStatus.DECEASED),
    (PatientStatus.READY_FOR_DISCHARGE, PatientStatus.DISCHARGED),
    (PatientStatus.READY_FOR_DISCHARGE, PatientStatus.DECEASED),
}


@pytest.mark.parametrize("current", list(PatientStatus))
@pytest.mark.parametrize("requested", list(PatientStatus))
def test_transition_table(current, requested):
    assert is_transition_allowed(current, requested) is ((current, requested) in ALLOWED)


def test_terminal_statuses_have_no_exits():
    for status in (PatientStatus.DISCHARGED, PatientStatus.DECEASED):
        assert not status.occupies_bed
        assert clinical_rules.ALLOWED_TRANSITIONS[status] == frozenset()
