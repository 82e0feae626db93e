from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

import app as app_module


@pytest.fixture
def client(tmp_path, monkeypatch) -> TestClient:
    sessions = {
        "sample_walk.json": {
            "walked_distance": 10.0,
            "headings": [
                {"heading_degrees": 0.0, "elapsed_ms": 0},
                {"heading_degrees": 10.0, "elapsed_ms": 500},
                {"heading_degrees": 20.0, "elapsed_ms": 500},
            ],
        },
        "single.json": {"walked_distance": 1.0, "headings": [{"heading_degrees": 5.0, "elapsed_ms": 0}]},
        "frozen_clock.json": {
            "walked_distance": 1.0,
            "headings": [{"heading_degrees": 5.0, "elapsed_ms": 0}, {"heading_degrees": 9.0, "elapsed_ms": 0}],
        },
    }
    for name, payload in sessions.items():
        (tmp_path / name).write_text(json.dumps(payload), encoding="utf-8")
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")

    monkeypatch.setattr(app_module, "DATA_DIR", tmp_path)
    monkeypatch.setattr(app_module, "report_cache", {})
    return TestClient(app_module.app)


def test_list_sessions(client: TestClient) -> None:
    response = client.get("/api/sessions")
    assert response.status_code == 200
    assert [row["filename"] for row in response.json()] == [
        "broken.json", "frozen_clock.json", "sample_walk.json", "single.json",
    ]


def test_get_veering_default_session(client: TestClient) -> None:
    response = client.get("/api/veering", params={"width": 200, "height": 100})
    assert response.status_code == 200
    payload = response.json()
    assert payload["direction"] == "right"
    assert payload["veering_distance"] == 3.42
    assert payload["session"] == "sample_walk.json"
    assert payload["path_points"][-1] == pytest.approx({"x": 125.0, "y": 0.0})


def test_get_veering_is_cached(client: TestClient) -> None:
    client.get("/api/veering", params={"session": "sample_walk.json"})
    assert ("sample_walk.json", 300.0, 300.0) in app_module.report_cache


def test_insufficient_session_is_not_an_error(client: TestClient) -> None:
    response = client.get("/api/veering", params={"session": "single.json"})
    assert response.status_code == 200
    assert response.json()["status"] == "no_veering"
    assert response.json()["path_points"] == []


def test_error_statuses(client: TestClient) -> None:
    assert client.get("/api/veering", params={"session": "missing.json"}).status_code == 404
    assert client.get("/api/veering", params={"session": "../secret.json"}).status_code == 404
    assert client.get("/api/veering", params={"session": "broken.json"}).status_code == 400
    assert client.get("/api/veering", params={"session": "frozen_clock.json"}).status_code == 422
    assert client.get("/api/veering", params={"width": 0}).status_code == 422


def test_post_veering(client: TestClient) -> None:
    body = {
        "walked_distance": 8.0,
        "headings": [
            {"heading_degrees": 358.0, "elapsed_ms": 0},
            {"heading_degrees": 2.0, "elapsed_ms": 1000},
        ],
    }
    response = client.post("/api/veering", json=body)
    assert response.status_code == 200
    payload = response.json()
    assert payload["direction"] == "right"
    assert payload["delta_theta_degrees"] == 4.0
    assert payload["message"] == "Estimated Veering: 0.55 m, Change of Angle: 4.0°"


def test_post_veering_errors(client: TestClient) -> None:
    bad = {"headings": [{"elapsed_ms": 0}]}
    assert client.post("/api/veering", json=bad).status_code == 400

    mismatched = {
        "headings": [{"heading_degrees": 1.0, "elapsed_ms": 0}, {"heading_degrees": 2.0, "elapsed_ms": 10}],
        "total_elapsed_ms": 99,
    }
    assert client.post("/api/veering", json=mismatched).status_code == 422


def test_shape_endpoint(client: TestClient) -> None:
    feature = client.get("/api/veering/shape").json()
    assert feature["properties"]["fill"] == "blue"
    assert client.get("/api/veering/shape", params={"session": "single.json"}).json() is None


def test_exports(client: TestClient) -> None:
    response = client.get("/api/export/veering")
    assert response.status_code == 200
    assert "veering_report.json" in response.headers["content-disposition"]
    assert json.loads(response.text)["direction"] == "right"

    response = client.get("/api/export/path")
    assert response.headers["content-type"].startswith("text/csv")
    assert response.text.splitlines()[0] == "index,x,y"

    response = client.get("/api/export/headings")
    assert response.text.splitlines()[0] == "index,heading_deg,elapsed_ms,t_ms"


def test_report_export_honours_canvas_size(client: TestClient) -> None:
    response = client.get("/api/export/veering", params={"width": 200, "height": 100})
    assert response.status_code == 200
    payload = json.loads(response.text)
    assert payload["canvas"] == {"width": 200.0, "height": 100.0}
    assert payload["path_points"][-1] == pytest.approx({"x": 125.0, "y": 0.0})


def test_session_export_reloads(client: TestClient) -> None:
    response = client.get("/api/export/session")
    assert response.status_code == 200
    assert "session.json" in response.headers["content-disposition"]
    payload = json.loads(response.text)
    assert payload["walked_distance"] == 10.0
    assert payload["total_elapsed_ms"] == 1000
    assert [h["heading_degrees"] for h in payload["headings"]] == [0.0, 10.0, 20.0]
    assert client.get("/api/export/session", params={"session": "missing.json"}).status_code == 404
