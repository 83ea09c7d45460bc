from __future__ import annotations

import json
from pathlib import Path

import pytest

from goal_planner.utils.planner_cli import main
from goal_planner.utils.portfolio_ops import add_goal, default_portfolio, set_monthly_income
from goal_planner.utils.storage import JsonFileStore


def _run(argv) -> int:
    with pytest.raises(SystemExit) as exc:
        main(["--log_level", "WARNING", *argv])
    return exc.value.code


def test_project_json(capsys):
    rc = _run(["project", "--target", "0", "--years", "1", "--savings", "10000", "--sip", "1000", "--json"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["results"]["fv_total"] == 22000
    assert "scenarios" not in out


def test_project_text_with_scenarios(capsys):
    rc = _run(
        ["project", "--target", "1500000", "--years", "5", "--savings", "50000", "--sip", "10000",
         "--return", "12", "--inflation", "5", "--scenarios"]
    )
    assert rc == 0
    out = capsys.readouterr().out
    assert "Very weak" in out
    assert "+2 years:" in out


def test_summary_on_missing_state_uses_default(tmp_path: Path, capsys):
    rc = _run(["summary", "--state", str(tmp_path / "none.json"), "--json"])
    assert rc == 0
    out = json.loads(capsys.readouterr().out)
    assert out["badge"]["code"] == "high_risk"
    assert out["allocation"] is None


def test_export_and_explain(tmp_path: Path, capsys):
    state = tmp_path / "state.json"
    JsonFileStore(str(state)).save(set_monthly_income(add_goal(default_portfolio()), "100000"))

    out_csv = tmp_path / "goals.csv"
    assert _run(["export", "--state", str(state), "--out", str(out_csv), "--calculate"]) == 0
    lines = out_csv.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert '"907532"' in lines[1]

    assert _run(["explain", "--state", str(state), "--goal_id", "2"]) == 0
    text = capsys.readouterr().out
    assert "Goal: New goal 2" in text
    assert "10.0% of your monthly income" in text

    assert _run(["explain", "--state", str(state), "--goal_id", "7"]) == 2
