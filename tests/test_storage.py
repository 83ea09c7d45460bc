from __future__ import annotations

import json
from pathlib import Path

from goal_planner.core.schemas import Portfolio
from goal_planner.utils.portfolio_ops import add_goal, calculate_all, default_portfolio, set_monthly_income
from goal_planner.utils.storage import InMemoryStore, JsonFileStore, load_portfolio


def test_missing_file_falls_back_to_default(tmp_path: Path):
    store = JsonFileStore(str(tmp_path / "state.json"))
    assert store.load() is None
    pf = load_portfolio(store)
    assert [g.id for g in pf.goals] == [1]
    assert pf.goals[0].inputs.goal_name == "Master's abroad fund"


def test_corrupt_file_falls_back(tmp_path: Path):
    p = tmp_path / "state.json"
    p.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(str(p))
    assert store.load() is None
    assert load_portfolio(store) == default_portfolio()


def test_wrong_shape_falls_back(tmp_path: Path):
    p = tmp_path / "state.json"
    for payload in ([1, 2, 3], {"goal-planner-v1": {"goals": "oops"}}, {"goal-planner-v1": "x"}):
        p.write_text(json.dumps(payload), encoding="utf-8")
        assert JsonFileStore(str(p)).load() is None


def test_round_trip_with_results(tmp_path: Path):
    store = JsonFileStore(str(tmp_path / "nested" / "state.json"))
    pf = calculate_all(set_monthly_income(add_goal(default_portfolio()), "120000"))
    store.save(pf)
    loaded = store.load()
    assert loaded == pf
    assert loaded.goals[0].results.health.code == "very_weak"


def test_save_preserves_other_keys(tmp_path: Path):
    p = tmp_path / "state.json"
    p.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    JsonFileStore(str(p), key="planner").save(default_portfolio())
    data = json.loads(p.read_text(encoding="utf-8"))
    assert data["theme"] == "dark"
    assert data["planner"]["risk_profile"] == "moderate"


def test_empty_goal_list_keeps_profile_and_income():
    store = InMemoryStore()
    store.save(Portfolio(goals=[], risk_profile="aggressive", monthly_income="5000"))
    pf = load_portfolio(store)
    assert len(pf.goals) == 1
    assert pf.risk_profile == "aggressive"
    assert pf.monthly_income == "5000"


def test_in_memory_store_tolerates_garbage():
    assert InMemoryStore().load() is None
    assert InMemoryStore("][").load() is None
    assert InMemoryStore('{"goals": [{"id": "x"}]}').load() is None
