"""
API integration tests.
Uses TestClient to avoid starting a server.
Requires: pip install httpx (for TestClient)
"""
from __future__ import annotations

import pytest

try:
    from fastapi.testclient import TestClient
    HAS_HTTPX = True
except (ImportError, RuntimeError):
    HAS_HTTPX = False

pytestmark = pytest.mark.skipif(not HAS_HTTPX, reason="httpx required for TestClient")

from league_sim.api import app
from league_sim.persistence import StoreUnavailableError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Temporary DB and fixed seed for each test."""
    db_path = tmp_path / "api_test.db"
    monkeypatch.setenv("LEAGUE_SIM_DB_PATH", str(db_path))
    monkeypatch.setenv("LEAGUE_SIM_SEED", "42")
    monkeypatch.delenv("LEAGUE_SIM_SCHEDULE_POLICY", raising=False)
    yield db_path


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def test_summary_at_start(client):
    """GET / before any week: default league, no results, no predictions."""
    resp = client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["current_week"] == 0
    assert data["week_count"] == 6
    assert data["status"] == "not_started"
    assert data["scope"] == "current_week"
    assert [t["name"] for t in data["standings"]] == [
        "Chelsea", "Arsenal", "Manchester City", "Liverpool",
    ]
    assert all(t["points"] == 0 for t in data["standings"])
    assert data["results"] == []
    assert data["predictions"] == []


def test_next_week(client):
    resp = client.post("/next-week")
    assert resp.status_code == 200
    data = resp.json()
    assert data["advanced"] is True
    assert data["current_week"] == 1
    assert data["status"] == "in_progress"
    results = client.get("/results").json()
    assert results["scope"] == "current_week"
    assert len(results["results"]) == 2
    assert all(r["week"] == 1 for r in results["results"])


def test_play_all_then_summary_shows_every_result(client):
    resp = client.post("/play-all")
    assert resp.status_code == 200
    data = resp.json()
    assert data["weeks_played"] == 6
    assert data["current_week"] == 6
    assert data["status"] == "complete"

    summary = client.get("/").json()
    assert summary["scope"] == "all"
    assert len(summary["results"]) == 12
    assert all(t["played"] == 6 for t in summary["standings"])
    points = [t["points"] for t in summary["standings"]]
    assert points == sorted(points, reverse=True)
    percentages = [p["percentage"] for p in summary["predictions"]]
    assert len(percentages) == 4
    assert percentages == sorted(percentages, reverse=True)


def test_next_week_at_complete_is_noop(client):
    client.post("/play-all")
    resp = client.post("/next-week")
    assert resp.status_code == 200
    assert resp.json()["advanced"] is False
    assert resp.json()["current_week"] == 6


def test_results_scope_all(client):
    client.post("/next-week")
    client.post("/next-week")
    resp = client.get("/results?scope=all")
    assert resp.status_code == 200
    assert len(resp.json()["results"]) == 4


def test_results_invalid_scope(client):
    assert client.get("/results?scope=yesterday").status_code == 422


def test_predictions_after_four_weeks(client):
    for _ in range(3):
        client.post("/next-week")
    assert client.get("/predictions").json()["predictions"] == []
    client.post("/next-week")
    preds = client.get("/predictions").json()["predictions"]
    assert {p["name"] for p in preds} == {"Chelsea", "Arsenal", "Manchester City", "Liverpool"}


def test_standings_endpoint(client):
    client.post("/next-week")
    standings = client.get("/standings").json()["standings"]
    assert len(standings) == 4
    assert sum(t["played"] for t in standings) == 4


def test_create_season_custom(client):
    resp = client.post(
        "/season",
        json={"competitors": [{"name": "North", "strength": 3}, {"name": "South", "strength": 1}]},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["week_count"] == 2
    assert data["current_week"] == 0
    assert len(data["schedule"]) == 2
    assert [c["name"] for c in data["competitors"]] == ["North", "South"]


def test_create_season_default_resets_week(client):
    client.post("/play-all")
    resp = client.post("/season")
    assert resp.status_code == 200
    assert resp.json()["current_week"] == 0
    assert client.get("/").json()["results"] == []


def test_create_season_odd_count_rejected(client):
    resp = client.post(
        "/season",
        json={"competitors": [{"name": "A", "strength": 1}, {"name": "B", "strength": 1}, {"name": "C", "strength": 1}]},
    )
    assert resp.status_code == 400
    assert "even" in resp.json()["detail"]


def test_create_season_negative_strength_rejected(client):
    resp = client.post(
        "/season",
        json={"competitors": [{"name": "A", "strength": -1}, {"name": "B", "strength": 1}]},
    )
    assert resp.status_code == 422


def test_store_unavailable_maps_to_503(client, monkeypatch):
    season = app.state.season

    def boom():
        raise StoreUnavailableError("advance week 1 failed: disk I/O error")

    monkeypatch.setattr(season, "advance_one_week", boom)
    resp = client.post("/next-week")
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Service unavailable"


def test_create_season_on_unreachable_store_is_503(client, tmp_path, monkeypatch):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    monkeypatch.setattr(app.state.season, "_db_path", blocker / "league.db")
    resp = client.post("/season")
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Service unavailable"
