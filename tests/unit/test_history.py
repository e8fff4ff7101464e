"""
Calculation History Tests
=========================
"""

from datetime import datetime, timedelta

import pytest

from hakoolab.calculators import calculator_registry
from hakoolab.services.history import CalculationHistory

BASE_TIME = datetime(2024, 1, 1, 8, 0, 0)


def make_result(calculator_id, inputs, minutes):
    """Successful run stamped `minutes` after BASE_TIME."""
    result = calculator_registry.get(calculator_id).run(inputs, locale="en")
    stamp = BASE_TIME + timedelta(minutes=minutes)
    return result.model_copy(update={"started_at": stamp, "completed_at": stamp})


@pytest.fixture
def history(session_factory):
    return CalculationHistory(session_factory, limit=3)


class TestRecord:

    def test_record_round_trip(self, history):
        calculator = calculator_registry.get("pump-power")
        result = make_result("pump-power", {"q_m3h": 50, "h_m": 40}, 0)
        saved = history.record(calculator, result)

        assert saved["id"] == result.run_id
        assert saved["category"] == "hydraulics"
        assert saved["calculator_name"] == calculator.metadata.name
        assert saved["outputs"]["whp_kw"] == pytest.approx(result.outputs["whp_kw"])
        assert saved["display"]["whp_kw"] == result.display["whp_kw"]

    def test_newest_first(self, history):
        for minutes, calculator_id in enumerate(["npsh", "brine", "lsi"]):
            inputs = {"qf": 20, "cf": 35000, "qp": 8} if calculator_id == "brine" else {}
            history.record(calculator_registry.get(calculator_id), make_result(calculator_id, inputs, minutes))

        assert [run["calculator_id"] for run in history.list()] == ["lsi", "brine", "npsh"]

    def test_capped_at_limit(self, history):
        for minutes in range(5):
            history.record(calculator_registry.get("npsh"), make_result("npsh", {}, minutes))

        runs = history.list()
        assert len(runs) == 3
        assert runs[-1]["created_at"] == (BASE_TIME + timedelta(minutes=2)).isoformat()


class TestListAndClear:

    @pytest.fixture
    def filled(self, session_factory):
        history = CalculationHistory(session_factory)
        history.record(calculator_registry.get("npsh"), make_result("npsh", {}, 0))
        history.record(calculator_registry.get("lsi"), make_result("lsi", {}, 1))
        history.record(calculator_registry.get("lsi-rsi"), make_result("lsi-rsi", {}, 2))
        return history

    def test_filter_by_category(self, filled):
        runs = filled.list(category="indices")
        assert {run["calculator_id"] for run in runs} == {"lsi", "lsi-rsi"}

    def test_search_by_name(self, filled):
        assert [run["calculator_id"] for run in filled.list(search="ryznar")] == ["lsi-rsi"]

    def test_search_by_id(self, filled):
        assert [run["calculator_id"] for run in filled.list(search="npsh")] == ["npsh"]

    def test_clear(self, filled):
        assert filled.clear() == 3
        assert filled.list() == []


class TestTagsAndFavorites:

    def test_tags_default_to_catalog_tags(self, history):
        saved = history.record(calculator_registry.get("npsh"), make_result("npsh", {}, 0))
        assert saved["tags"] == calculator_registry.get("npsh").metadata.tags
        assert saved["favorite"] is False

    def test_custom_tags(self, history):
        saved = history.record(calculator_registry.get("npsh"), make_result("npsh", {}, 0),
                               tags=["plant-a", "intake"])
        assert saved["tags"] == ["plant-a", "intake"]

    def test_search_matches_tags(self, history):
        history.record(calculator_registry.get("npsh"), make_result("npsh", {}, 0), tags=["plant-a"])
        history.record(calculator_registry.get("lsi"), make_result("lsi", {}, 1), tags=["plant-b"])
        assert [run["calculator_id"] for run in history.list(search="plant-a")] == ["npsh"]

    def test_toggle_favorite(self, history):
        saved = history.record(calculator_registry.get("npsh"), make_result("npsh", {}, 0))
        assert history.toggle_favorite(saved["id"])["favorite"] is True
        assert history.toggle_favorite(saved["id"])["favorite"] is False

    def test_toggle_unknown_run(self, history):
        assert history.toggle_favorite("no-such-run") is None

    def test_favorites_only(self, history):
        first = history.record(calculator_registry.get("npsh"), make_result("npsh", {}, 0))
        history.record(calculator_registry.get("lsi"), make_result("lsi", {}, 1))
        history.toggle_favorite(first["id"])

        runs = history.list(favorites_only=True)
        assert [run["calculator_id"] for run in runs] == ["npsh"]
