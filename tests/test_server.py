from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from server.app import SimulationManager, create_app


@pytest.fixture
def manager() -> SimulationManager:
    return SimulationManager(total_floors=10, number_of_cars=2, loading_latency=2.0, travel_latency=1.0, random_seed=5)


@pytest.fixture
def client(manager) -> TestClient:
    # Not used as a context manager, so the background tick loop never starts.
    return TestClient(create_app(manager))


def test_initial_state(client):
    body = client.get("/state").json()
    assert [car["car_id"] for car in body["cars"]] == [1, 2]
    assert body["pending_requests"] == []
    assert body["running"] is False
    assert body["total_floors"] == 10


def test_request_is_accepted_then_deduplicated(client):
    first = client.post("/requests", json={"floor": 6, "direction": "UP"})
    assert first.status_code == 200
    assert first.json()["outcome"] == "accepted"
    assert first.json()["cars"][0]["destination_queue"] == [6]

    second = client.post("/requests", json={"floor": 6, "direction": "UP"})
    assert second.json()["outcome"] == "deduplicated"
    assert len(second.json()["pending_requests"]) == 1


def test_invalid_floor_is_a_client_error(client):
    response = client.post("/requests", json={"floor": 42, "direction": "DOWN"})
    assert response.status_code == 400
    assert client.get("/state").json()["pending_requests"] == []


def test_idle_direction_is_a_client_error(client):
    assert client.post("/requests", json={"floor": 3, "direction": "IDLE"}).status_code == 400


def test_unknown_direction_fails_validation(client):
    assert client.post("/requests", json={"floor": 3, "direction": "LEFT"}).status_code == 422


def test_manager_only_steps_while_running(client, manager):
    client.post("/requests", json={"floor": 3, "direction": "UP"})
    assert manager.advance() is False
    assert manager.controller.current_time == 0.0

    assert client.post("/simulation/start").json()["running"] is True
    assert manager.advance() is True
    state = client.get("/state").json()
    assert state["cars"][0]["current_floor"] == 2
    assert state["cars"][0]["motion_state"] == "MOVING"
    assert manager.snapshots_seen > 0

    assert client.post("/simulation/stop").json()["running"] is False


def test_auto_generate_adds_requests_while_running(client, manager):
    client.post("/simulation/start")
    assert client.post("/simulation/auto-generate", json={"enabled": True}).json()["auto_generate"] is True
    manager.advance()
    assert any("request received" in entry for entry in client.get("/state").json()["recent_log"])


def test_random_request(client):
    body = client.post("/requests/random").json()
    assert body["outcome"] in {"accepted", "deduplicated"}


def test_reset_restores_fresh_bank(client, manager):
    client.post("/requests", json={"floor": 4, "direction": "DOWN"})
    client.post("/simulation/start")
    manager.advance()

    body = client.post("/simulation/reset").json()
    assert body["running"] is False
    assert body["pending_requests"] == []
    assert all(car["current_floor"] == 1 for car in body["cars"])
    assert body["recent_log"][-1].endswith("Simulation reset")


def test_websocket_sends_current_state_on_connect(client):
    with client.websocket_connect("/ws/stream") as websocket:
        message = websocket.receive_json()
    assert len(message["cars"]) == 2
