import random

import pytest

fastapi = pytest.importorskip("fastapi")
pytest.importorskip("httpx")
from fastapi.testclient import TestClient

from figuregen.backend.api import control_count, create_app
from figuregen.backend.config import AppSettings
from figuregen.backend.sequencer import GenerationSequencer

SETTINGS = AppSettings(host="127.0.0.1", port=8000, columns=5, log_level="WARNING")


def _app():
    return create_app(sequencer=GenerationSequencer(rng=random.Random(42)), settings=SETTINGS)


def test_startup_commits_initial_batch_of_ten() -> None:
    with TestClient(_app()) as client:
        response = client.get("/api/state")

    assert response.status_code == 200
    data = response.json()
    assert data["state"]["committedGeneration"] == 1
    assert data["state"]["requestedGeneration"] == 1
    assert len(data["state"]["samples"]) == 10
    assert data["svg"].startswith("<svg")


def test_regenerate_bumps_generation_and_keeps_count() -> None:
    with TestClient(_app()) as client:
        first = client.get("/api/state").json()
        response = client.post("/api/regenerate")

    assert response.status_code == 200
    state = response.json()["state"]
    assert state["committedGeneration"] == 2
    assert state["desiredCount"] == 10
    assert len(state["samples"]) == 10
    assert state["samples"] != first["state"]["samples"]


def test_post_count_commits_requested_size() -> None:
    with TestClient(_app()) as client:
        response = client.post("/api/count", json={"count": 5})

    assert response.status_code == 200
    state = response.json()["state"]
    assert state["committedGeneration"] == 2
    assert state["desiredCount"] == 5
    assert len(state["samples"]) == 5


def test_post_count_ignores_malformed_value() -> None:
    with TestClient(_app()) as client:
        before = client.get("/api/state").json()
        response = client.post("/api/count", json={"count": "lots"})
        missing = client.post("/api/count", json={})

    assert response.status_code == 200
    assert missing.status_code == 200
    assert response.json() == before
    assert missing.json() == before


def test_figures_endpoint_returns_svg_document() -> None:
    with TestClient(_app()) as client:
        response = client.get("/api/figures.svg")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.text.startswith("<svg")


def test_index_serves_control_page() -> None:
    with TestClient(_app()) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert 'type="range"' in response.text
    assert "/ws/state" in response.text
    assert "message.state.committedGeneration < appliedGeneration" in response.text


def test_websocket_sends_initial_state_after_connect() -> None:
    with TestClient(_app()) as client:
        with client.websocket_connect("/ws/state") as websocket:
            message = websocket.receive_json()

    assert message["type"] == "state.full"
    assert len(message["state"]["samples"]) == 10
    assert message["svg"].startswith("<svg")


def test_websocket_broadcasts_commits_to_all_clients() -> None:
    with TestClient(_app()) as client:
        with client.websocket_connect("/ws/state") as ws_first:
            with client.websocket_connect("/ws/state") as ws_second:
                ws_first.receive_json()
                ws_second.receive_json()

                client.post("/api/count", json={"count": "3"})

                first_message = ws_first.receive_json()
                second_message = ws_second.receive_json()

    assert first_message["type"] == "state.full"
    assert second_message["type"] == "state.full"
    assert len(first_message["state"]["samples"]) == 3
    assert second_message["state"]["committedGeneration"] == 2


@pytest.mark.parametrize("raw", [0, 31, 1e300, "-1", 20000])
def test_post_count_outside_control_range_is_ignored(raw) -> None:
    with TestClient(_app()) as client:
        before = client.get("/api/state").json()
        response = client.post("/api/count", json={"count": raw})

    assert response.status_code == 200
    assert response.json() == before
    assert response.json()["state"]["requestedGeneration"] == 1
    assert len(response.json()["state"]["samples"]) == 10


@pytest.mark.parametrize("raw, expected", [(1, 1), ("30", 30), (12.0, 12), (0, None), (31, None), (1e300, None), ("x", None)])
def test_control_count_limits_to_range_domain(raw, expected) -> None:
    assert control_count(raw) == expected
