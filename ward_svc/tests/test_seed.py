"""
Tests for the demonstration dataset bootstrap.
"""
from datetime import timedelta

from repositories import (
    NOTES,
    PATIENTS,
    TEMPERATURES,
    PatientRepository,
    TemperatureRepository,
    ensure_seeded,
)
from services import clinical_rules


def test_seeds_empty_store(store, now):
    assert ensure_seeded(store, now=now) is True

    assert len(store.load(PATIENTS)) == 3
    assert len(store.load(TEMPERATURES)) == 6
    assert store.load(NOTES) == []


def test_seed_is_idempotent(store, now):
    ensure_seeded(store, now=now)
    assert ensure_seeded(store, now=now + timedelta(days=1)) is False

    assert len(store.load(PATIENTS)) == 3
    assert len(store.load(TEMPERATURES)) == 6


def test_existing_empty_patient_collection_is_not_reseeded(store, now):
    store.save(PATIENTS, [])

    assert ensure_seeded(store, now=now) is False
    assert store.load(PATIENTS) == []
    assert store.has(TEMPERATURES) is False


def test_seeded_patients_and_dates(store, now):
    ensure_seeded(store, now=now)
    patients = {p.id: p for p in PatientRepository(store).get_all()}

    assert set(patients) == {"1", "2", "3"}
    assert patients["1"].name == "John Doe"
    assert patients["1"].bed_number == "A-101"
    assert patients["1"].admission_date == now - timedelta(days=5)
    assert patients["2"].status.value == "Active"
    assert patients["3"].status.value == "ReadyForDischarge"
    assert patients["3"].discharge_approved_date == now


def test_seeded_dataset_statistics(store, now):
    ensure_seeded(store, now=now)
    patients = PatientRepository(store).get_all()

    beds = clinical_rules.compute_bed_statistics(patients, total_beds=74)
    assert (beds.total, beds.occupied, beds.available) == (74, 3, 71)

    outcomes = clinical_rules.compute_outcome_statistics(patients)
    assert (outcomes.active, outcomes.recovered, outcomes.deceased) == (3, 0, 0)
    assert outcomes.success_rate == 0


def test_seeded_fever_free_verdicts(store, now):
    ensure_seeded(store, now=now)
    temperatures = TemperatureRepository(store)

    verdicts = {
        pid: clinical_rules.is_fever_free(temperatures.get_for_patient(pid), now=now)
        for pid in ("1", "2", "3")
    }

    assert verdicts == {"1": False, "2": False, "3": True}


def test_seed_works_on_sqlite(sqlite_store, now):
    assert ensure_seeded(sqlite_store, now=now) is True
    assert ensure_seeded(sqlite_store, now=now) is False
    assert [r["id"] for r in sqlite_store.load(PATIENTS)] == ["1", "2", "3"]


def test_seed_skips_when_patients_appear_after_check(store, now, monkeypatch):
    # Another worker writes the patient collection between the check and the write
    real_has = store.has

    def has_then_race(collection):
        absent = not real_has(collection)
        if collection == PATIENTS and absent:
            store.save(PATIENTS, [])
        return not absent

    monkeypatch.setattr(store, "has", has_then_race)

    assert ensure_seeded(store, now=now) is False
    assert store.load(PATIENTS) == []
    assert store.load(TEMPERATURES) == []


def test_seed_writes_everything_in_one_step(store, now, monkeypatch):
    def no_save(collection, records):
        raise AssertionError(f"seed must not save '{collection}' on its own")

    monkeypatch.setattr(store, "save", no_save)

    assert ensure_seeded(store, now=now) is True
    assert len(store.load(PATIENTS)) == 3
