"""
API Integration Tests
=====================
End-to-end tests through the FastAPI app: catalog, runs, favorites, history.
"""

from datetime import datetime, timedelta

import pytest

from hakoolab import main
from hakoolab.core.config import get_settings


@pytest.fixture(autouse=True)
def clean_state(client):
    """Start every test with no favorites and no history."""
    client.delete("/api/favorites")
    client.delete("/api/history")
    yield


class TestSystem:

    def test_status(self, client):
        response = client.get("/api/status")
        assert response.status_code == 200
        data = response.json()
        assert data["system"] == "HakooLab"
        assert data["calculators"] == 30

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["checks"]["database"]["ok"] is True

    def test_health_does_not_create_log_dir(self, client, monkeypatch, tmp_path):
        missing = tmp_path / "not-yet" / "logs"
        monkeypatch.setattr(get_settings(), "log_dir", str(missing))

        response = client.get("/api/health")
        assert response.status_code == 200
        assert "free_gb" in response.json()["checks"]["disk"]
        assert not missing.exists()

    def test_uptime_past_one_day(self, client, monkeypatch):
        monkeypatch.setattr(main, "startup_time", datetime.now() - timedelta(days=2, minutes=5))
        assert client.get("/api/status").json()["uptime_seconds"] >= 2 * 86400
        assert client.get("/api/health").json()["uptime_seconds"] >= 2 * 86400

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"


class TestCatalog:

    def test_catalog(self, client):
        data = client.get("/api/calculators/catalog").json()
        assert data["total_calculators"] == 30
        assert data["category_counts"]["indices"] == 2
        lsi = next(c for c in data["categories"]["indices"] if c["id"] == "lsi")
        assert lsi["route"] == "/calculators/indices/lsi"

    def test_get_calculator(self, client):
        response = client.get("/api/calculators/pump-power")
        assert response.status_code == 200
        data = response.json()
        assert data["json_schema"]["required"] == ["q_m3h", "h_m"]

    def test_unknown_calculator(self, client):
        assert client.get("/api/calculators/warp-drive").status_code == 404

    def test_search(self, client):
        data = client.post("/api/calculators/search", json={"query": "osmotic"}).json()
        assert [r["id"] for r in data["results"]] == ["osmotic-pressure"]

    def test_search_unknown_category(self, client):
        data = client.post("/api/calculators/search", json={"category": "astrology"}).json()
        assert data["total"] == 0


class TestRun:

    def test_run_success(self, client):
        response = client.post(
            "/api/calculators/pump-power/run",
            json={"inputs": {"q_m3h": "50", "h_m": "40"}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "success"
        assert data["outputs"]["whp_kw"] == pytest.approx(5.437, abs=1e-3)
        assert data["display"]["whp_kw"] == "5.44 kW"

    def test_run_with_locale(self, client):
        response = client.post(
            "/api/calculators/energy-cost/run",
            json={"inputs": {"power_kw": 100, "tariff": 0.12}, "locale": "fr"},
        )
        assert response.json()["display"]["energy_kwh"] == "2 400,00 kWh"

    def test_validation_error_is_422(self, client):
        response = client.post("/api/calculators/flow-velocity/run", json={"inputs": {"q_m3h": 0, "d_mm": 150}})
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["field"] == "Flow rate (m3/h)"
        assert detail["message"] == "Flow rate (m3/h) must be > 0"

    def test_out_of_range_result_is_422(self, client):
        response = client.post(
            "/api/calculators/pump-power/run",
            json={"inputs": {"q_m3h": "1e308", "h_m": "1e308"}},
        )
        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "whp_kw"

    def test_arithmetic_error_is_422(self, client):
        response = client.post(
            "/api/calculators/tdh/run",
            json={"inputs": {"static_head_m": 15, "q_m3h": 60, "d_mm": "1e-70", "l_m": 120}},
        )
        assert response.status_code == 422

    def test_unknown_calculator_run(self, client):
        assert client.post("/api/calculators/nope/run", json={"inputs": {}}).status_code == 404


class TestHistory:

    def test_successful_runs_recorded(self, client):
        client.post("/api/calculators/npsh/run", json={"inputs": {}})
        client.post("/api/calculators/lsi/run", json={"inputs": {}})
        client.post("/api/calculators/flow-velocity/run", json={"inputs": {"q_m3h": 0, "d_mm": 1}})

        data = client.get("/api/history").json()
        assert [run["calculator_id"] for run in data["runs"]] == ["lsi", "npsh"]

    def test_filter_by_category(self, client):
        client.post("/api/calculators/npsh/run", json={"inputs": {}})
        client.post("/api/calculators/lsi/run", json={"inputs": {}})

        data = client.get("/api/history", params={"category": "indices"}).json()
        assert [run["calculator_id"] for run in data["runs"]] == ["lsi"]

    def test_run_tags_are_stored(self, client):
        client.post("/api/calculators/npsh/run", json={"inputs": {}, "tags": ["intake"]})
        assert client.get("/api/history").json()["runs"][0]["tags"] == ["intake"]

    def test_toggle_run_favorite(self, client):
        run_id = client.post("/api/calculators/npsh/run", json={"inputs": {}}).json()["run_id"]
        client.post("/api/calculators/lsi/run", json={"inputs": {}})

        response = client.post(f"/api/history/{run_id}/favorite")
        assert response.status_code == 200
        assert response.json()["favorite"] is True

        data = client.get("/api/history", params={"favorites_only": True}).json()
        assert [run["id"] for run in data["runs"]] == [run_id]

    def test_toggle_unknown_run_favorite(self, client):
        assert client.post("/api/history/missing/favorite").status_code == 404

    def test_clear(self, client):
        client.post("/api/calculators/npsh/run", json={"inputs": {}})
        assert client.delete("/api/history").json()["removed"] == 1
        assert client.get("/api/history").json()["total"] == 0


class TestFavorites:

    def test_toggle_known_calculator(self, client):
        response = client.post("/api/favorites/toggle", json={"key": "tdh"})
        assert response.json() == {"key": "tdh", "is_favorite": True}

        item = client.get("/api/favorites/tdh").json()["item"]
        assert item["title"] == "Total Dynamic Head"
        assert item["route"] == "/calculators/hydraulics/tdh"
        assert item["group"] == "hydraulics"

    def test_toggle_twice_removes(self, client):
        client.post("/api/favorites/toggle", json={"key": "tdh"})
        response = client.post("/api/favorites/toggle", json={"key": "tdh"})
        assert response.json()["is_favorite"] is False
        assert client.get("/api/favorites").json()["total"] == 0

    def test_custom_favorite_needs_title_and_route(self, client):
        assert client.post("/api/favorites/toggle", json={"key": "my-sheet"}).status_code == 422
        response = client.post(
            "/api/favorites/toggle",
            json={"key": "my-sheet", "title": "My sheet", "route": "/sheets/1"},
        )
        assert response.json()["is_favorite"] is True

    def test_empty_key_rejected(self, client):
        assert client.post("/api/favorites/toggle", json={"key": "  "}).status_code == 422

    def test_list_newest_first(self, client):
        client.post("/api/favorites/toggle", json={"key": "tdh"})
        client.post("/api/favorites/toggle", json={"key": "brine"})
        keys = [item["key"] for item in client.get("/api/favorites").json()["favorites"]]
        assert set(keys) == {"tdh", "brine"}
        added = [item["added_at"] for item in client.get("/api/favorites").json()["favorites"]]
        assert added == sorted(added, reverse=True)

    def test_delete(self, client):
        client.post("/api/favorites/toggle", json={"key": "brine"})
        assert client.delete("/api/favorites/brine").status_code == 200
        assert client.delete("/api/favorites/brine").status_code == 404
        assert client.get("/api/favorites/brine").json()["is_favorite"] is False

    def test_clear(self, client):
        client.post("/api/favorites/toggle", json={"key": "brine"})
        client.post("/api/favorites/toggle", json={"key": "tdh"})
        assert client.delete("/api/favorites").json() == {"status": "cleared"}
        assert client.get("/api/favorites").json()["favorites"] == []
