"""
HTTP-level tests for the employee routes and the health endpoint.
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from employee_api.app import create_app  # noqa: E402
from employee_api.core import config as core_config  # noqa: E402
from employee_api.repositories.json_storage import JsonStorage, PersistenceError  # noqa: E402


@pytest.fixture()
def db_file(tmp_path, monkeypatch):
    """Point the app at a temporary store and reset cached settings."""
    path = tmp_path / "db.json"
    monkeypatch.setenv("EMPLOYEES_DB_PATH", str(path))
    core_config.get_settings.cache_clear()
    yield path
    core_config.get_settings.cache_clear()


@pytest.fixture()
def client(db_file):
    with TestClient(create_app()) as c:
        yield c


ANN = {"name": "Ann", "age": 30, "position": "Engineer"}


def test_list_empty(client):
    resp = client.get("/employees")
    assert resp.status_code == 200
    assert resp.json() == []


def test_create_returns_id_and_location(client, db_file):
    resp = client.post("/employees", json=ANN)
    assert resp.status_code == 201
    body = resp.json()
    emp_id = body["id"]
    assert body["message"] == f"Employee added with ID: {emp_id}"
    assert resp.headers["location"] == f"/employees/{emp_id}"
    assert json.loads(db_file.read_text(encoding="utf-8")) == {emp_id: {"id": emp_id, **ANN}}


def test_client_supplied_id_is_ignored(client):
    resp = client.post("/employees", json={**ANN, "id": "chosen-by-client"})
    assert resp.status_code == 201
    assert resp.json()["id"] != "chosen-by-client"
    assert client.get("/employees/chosen-by-client").status_code == 404


def test_ann_scenario(client):
    emp_id = client.post("/employees", json=ANN).json()["id"]

    resp = client.get(f"/employees/{emp_id}")
    assert resp.status_code == 200
    assert resp.json() == {"id": emp_id, **ANN}

    resp = client.delete(f"/employees/{emp_id}")
    assert resp.status_code == 204
    assert resp.content == b""

    resp = client.get(f"/employees/{emp_id}")
    assert resp.status_code == 404
    assert resp.json() == {"detail": "Employee not found"}

    assert client.get("/employees").json() == []


def test_delete_twice_is_not_an_error(client):
    emp_id = client.post("/employees", json=ANN).json()["id"]
    assert client.delete(f"/employees/{emp_id}").status_code == 204
    assert client.delete(f"/employees/{emp_id}").status_code == 204


def test_list_after_creates(client):
    ids = {client.post("/employees", json={**ANN, "name": n}).json()["id"] for n in ("a", "b", "c")}
    listed = client.get("/employees").json()
    assert {e["id"] for e in listed} == ids


@pytest.mark.parametrize(
    "payload",
    [
        {**ANN, "age": 256},
        {**ANN, "age": -1},
        {"name": "Ann", "position": "Engineer"},
        {"age": 30, "position": "Engineer"},
    ],
)
def test_create_rejects_invalid_payload(client, payload):
    resp = client.post("/employees", json=payload)
    assert resp.status_code == 422
    assert client.get("/employees").json() == []


def test_state_survives_restart(db_file):
    with TestClient(create_app()) as c:
        emp_id = c.post("/employees", json=ANN).json()["id"]
    with TestClient(create_app()) as c:
        assert c.get(f"/employees/{emp_id}").json() == {"id": emp_id, **ANN}


def test_corrupt_file_starts_empty(db_file):
    db_file.write_text("[[[", encoding="utf-8")
    with TestClient(create_app()) as c:
        assert c.get("/employees").json() == []
        assert c.get("/healthz").json() == {"ok": True, "employees": 0, "pending_sync": False}


def test_persistence_failure_returns_503_and_flush_recovers(client, monkeypatch):
    real_save = JsonStorage.save

    def broken_save(self, snapshot):
        raise PersistenceError("disk full")

    monkeypatch.setattr(JsonStorage, "save", broken_save)
    resp = client.post("/employees", json=ANN)
    assert resp.status_code == 503
    assert resp.json()["error"] == "persistence_failed"
    assert client.get("/healthz").json() == {"ok": True, "employees": 1, "pending_sync": True}
    assert client.post("/healthz/flush").status_code == 503

    monkeypatch.setattr(JsonStorage, "save", real_save)
    resp = client.post("/healthz/flush")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "employees": 1, "pending_sync": False}
