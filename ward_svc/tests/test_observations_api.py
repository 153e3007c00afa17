"""
Tests for temperature and note endpoints.
"""
from datetime import timedelta

import pytest


@pytest.fixture
def patient_id(admit):
    return admit().id


# =============================================================================
# TEMPERATURES
# =============================================================================

def test_record_temperature(client, patient_id):
    response = client.post(
        f"/api/v1/patients/{patient_id}/temperatures",
        json={"value": 36.8, "recorded_by": "Nurse Joy"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["patient_id"] == patient_id
    assert data["value"] == 36.8
    assert data["recorded_by"] == "Nurse Joy"
    assert data["timestamp"].startswith("2025-03-10T12:00:00")


def test_record_temperature_out_of_range(client, patient_id):
    response = client.post(
        f"/api/v1/patients/{patient_id}/temperatures",
        json={"value": 50.0, "recorded_by": "Nurse Joy"},
    )

    assert response.status_code == 400
    assert "between 30 and 45" in response.json()["detail"]
    assert client.get(f"/api/v1/patients/{patient_id}/temperatures").json() == []


def test_record_temperature_missing_fields(client, patient_id):
    url = f"/api/v1/patients/{patient_id}/temperatures"
    assert client.post(url, json={"value": 36.6}).status_code == 422
    assert client.post(url, json={"recorded_by": "Nurse Joy"}).status_code == 422


def test_record_temperature_unknown_patient(client):
    response = client.post(
        "/api/v1/patients/missing/temperatures",
        json={"value": 36.8, "recorded_by": "Nurse Joy"},
    )
    assert response.status_code == 404


def test_list_temperatures_with_limit(client, patient_id, add_reading, now):
    for days_ago, value in [(3, 37.9), (2, 37.2), (1, 36.8)]:
        add_reading(patient_id, value, now - timedelta(days=days_ago))

    everything = client.get(f"/api/v1/patients/{patient_id}/temperatures").json()
    recent = client.get(f"/api/v1/patients/{patient_id}/temperatures", params={"limit": 2}).json()

    assert [r["value"] for r in everything] == [37.9, 37.2, 36.8]
    assert [r["value"] for r in recent] == [37.2, 36.8]


def test_list_temperatures_invalid_limit(client, patient_id):
    assert client.get(f"/api/v1/patients/{patient_id}/temperatures", params={"limit": 0}).status_code == 422


def test_latest_temperature(client, patient_id, add_reading, now):
    missing = client.get(f"/api/v1/patients/{patient_id}/temperatures/latest")
    assert missing.status_code == 404

    add_reading(patient_id, 37.9, now - timedelta(days=1))
    add_reading(patient_id, 36.8, now - timedelta(hours=2))

    response = client.get(f"/api/v1/patients/{patient_id}/temperatures/latest")
    assert response.status_code == 200
    assert response.json()["value"] == 36.8


def test_temperature_taken_today(client, patient_id):
    url = f"/api/v1/patients/{patient_id}/temperatures/today"
    assert client.get(url).json() == {"patient_id": patient_id, "taken_today": False}

    client.post(
        f"/api/v1/patients/{patient_id}/temperatures",
        json={"value": 36.6, "recorded_by": "Nurse Joy"},
    )

    assert client.get(url).json()["taken_today"] is True


def test_temperature_taken_today_unknown_patient(client):
    assert client.get("/api/v1/patients/missing/temperatures/today").status_code == 404


# =============================================================================
# NOTES
# =============================================================================

def test_add_and_list_notes(client, patient_id, clock):
    url = f"/api/v1/patients/{patient_id}/notes"

    first = client.post(url, json={"note": "Febrile, start fluids.", "doctor_name": "Dr. Grey"})
    clock.advance(hours=8)
    second = client.post(url, json={"note": "Afebrile overnight.", "doctor_name": "Dr. House"})

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()["doctor_name"] == "Dr. House"

    notes = client.get(url).json()
    assert [n["note"] for n in notes] == ["Afebrile overnight.", "Febrile, start fluids."]


def test_add_blank_note(client, patient_id):
    response = client.post(
        f"/api/v1/patients/{patient_id}/notes",
        json={"note": "  ", "doctor_name": "Dr. Grey"},
    )
    assert response.status_code == 400


def test_notes_unknown_patient(client):
    assert client.get("/api/v1/patients/missing/notes").status_code == 404
    response = client.post(
        "/api/v1/patients/missing/notes",
        json={"note": "Text", "doctor_name": "Dr. Grey"},
    )
    assert response.status_code == 404
