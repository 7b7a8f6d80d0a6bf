"""Tests for the HTTP API."""

from __future__ import annotations

from fastapi.testclient import TestClient

from sketchbook import __version__
from sketchbook.config import Settings
from sketchbook.dependencies import get_settings
from sketchbook.main import app


client = TestClient(app)

SMALL_NODES = {"cols": 2, "rows": 2, "num_segments": 5}


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__
    assert data["sketches_registered"] >= 5


def test_list_sketches():
    response = client.get("/api/sketches")
    assert response.status_code == 200
    keys = [s["key"] for s in response.json()]
    assert keys == sorted(keys)
    assert "stairs-04" in keys


def test_sketch_detail():
    response = client.get("/api/sketches/stairs-05")
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Stairs 05"
    assert data["defaults"]["num_points"] == 12
    assert data["defaults"]["avoid_intersections"] is True


def test_sketch_detail_unknown():
    response = client.get("/api/sketches/nope")
    assert response.status_code == 404
    assert "nope" in response.json()["detail"]


def test_render():
    response = client.post("/api/sketches/nodes-02/render", json={"seed": 9, "params": SMALL_NODES})
    assert response.status_code == 200
    data = response.json()
    assert data["seed"] == 9
    assert data["params"]["cols"] == 2
    assert len(data["primitives"]) == 4
    assert all(p["kind"] == "polyline" for p in data["primitives"])
    assert data["pens"] == {}
    assert data["processing_time_ms"] >= 0


def test_render_is_deterministic():
    body = {"seed": 21, "params": SMALL_NODES}
    first = client.post("/api/sketches/nodes-02/render", json=body).json()
    second = client.post("/api/sketches/nodes-02/render", json=body).json()
    assert first["primitives"] == second["primitives"]


def test_render_negative_seed():
    response = client.post("/api/sketches/nodes-02/render", json={"seed": -3, "params": SMALL_NODES})
    assert response.status_code == 200
    assert response.json()["seed"] == -3


def test_render_resolves_colors():
    response = client.post(
        "/api/sketches/nodes-02/render",
        json={"seed": 1, "params": SMALL_NODES, "resolve_colors": True},
    )
    assert response.status_code == 200
    pens = response.json()["pens"]
    assert "staedtlerPens.baby_blue" in pens
    stroke = pens["staedtlerPens.baby_blue"]
    assert stroke["stroke_width"] == 0.3
    assert len(stroke["rgba"]) == 4


def test_render_unknown_pen_is_422():
    response = client.post(
        "/api/sketches/nodes-02/render",
        json={"seed": 1, "params": {**SMALL_NODES, "color": "staedtlerPens.nope"}, "resolve_colors": True},
    )
    assert response.status_code == 422
    assert "nope" in response.json()["detail"]


def test_render_bad_params_is_422():
    response = client.post("/api/sketches/nodes-02/render", json={"params": {"cols": "many"}})
    assert response.status_code == 422
    response = client.post("/api/sketches/nodes-02/render", json={"params": {"bogus": 1}})
    assert response.status_code == 422


def test_render_unknown_sketch_is_404():
    response = client.post("/api/sketches/nope/render", json={})
    assert response.status_code == 404


def test_render_uses_default_seed():
    app.dependency_overrides[get_settings] = lambda: Settings(default_seed=1234)
    try:
        response = client.post("/api/sketches/nodes-02/render", json={"params": SMALL_NODES})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 200
    assert response.json()["seed"] == 1234
