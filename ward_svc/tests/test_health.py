"""
Tests for the root, health and readiness endpoints.

- /: Root endpoint with API info
- /health: Liveness probe
- /ready: Readiness probe with record store checks
"""
from core.dependencies import get_record_store
from core.exceptions import RecordStoreError
from repositories import InMemoryRecordStore


# =============================================================================
# ROOT ENDPOINT TESTS
# =============================================================================

def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "Ward Service API"
    assert data["version"] == "1.0.0"
    assert data["health"] == "/health"
    assert data["ready"] == "/ready"


# =============================================================================
# HEALTH ENDPOINT TESTS (LIVENESS)
# =============================================================================

def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "1.0.0"
    assert data["timestamp"].endswith("Z")


# =============================================================================
# READINESS ENDPOINT TESTS
# =============================================================================

def test_ready_endpoint(client):
    response = client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert [d["name"] for d in data["dependencies"]] == ["record_store", "patient_records"]
    assert all(d["status"] == "ok" for d in data["dependencies"])
    assert data["dependencies"][0]["latency_ms"] >= 0
    assert data["dependencies"][1]["message"] == "no patient collection yet"


def test_ready_endpoint_counts_patient_records(client, admit):
    admit()
    admit()
    data = client.get("/ready").json()
    assert data["dependencies"][1]["message"] == "2 patient records readable"


def test_ready_endpoint_with_sqlite_store(test_app, client, sqlite_store):
    test_app.dependency_overrides[get_record_store] = lambda: sqlite_store
    response = client.get("/ready")
    assert response.status_code == 200
    assert "SQLiteRecordStore" in response.json()["dependencies"][0]["message"]


class UnreachableStore(InMemoryRecordStore):
    def ping(self) -> None:
        raise RecordStoreError(operation="ping")


def test_ready_endpoint_store_unavailable(test_app, client):
    test_app.dependency_overrides[get_record_store] = lambda: UnreachableStore()

    response = client.get("/ready")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    assert data["dependencies"][0]["status"] == "unavailable"


def test_ready_endpoint_malformed_patient_records(client, store):
    store.save("patients", [{"id": "1"}])

    response = client.get("/ready")

    assert response.status_code == 503
    checks = response.json()["dependencies"]
    assert checks[0]["status"] == "ok"
    assert checks[1]["status"] == "unavailable"
    assert checks[1]["message"] == "Record store error during load"
