from goal_planner.tools.quant_tools import (
    goal_input_from_payload,
    tool_compute_goal,
    tool_run_scenarios,
    tool_summarize_portfolio,
)
from goal_planner.utils.portfolio_ops import calculate_all, default_portfolio


def test_aliases_map_to_goal_fields():
    g = goal_input_from_payload(
        {"target": 100000, "time_horizon_years": 1, "monthly_sip": 1000, "expected_return": 0, "unknown": "x"}
    )
    assert g.target_amount == "100000"
    assert g.years == "1"
    assert g.monthly_contribution == "1000"
    assert g.annual_return == "0"


def test_canonical_field_wins_over_alias():
    g = goal_input_from_payload({"years": "3", "time_horizon_years": "9"})
    assert g.years == "3"


def test_tool_compute_goal():
    out = tool_compute_goal({"target_amount": "0", "years": "1", "current_savings": "10000", "monthly_sip": "1000"})
    assert out["fv_total"] == 22000
    assert out["health"]["code"] == "undefined"


def test_tool_run_scenarios_and_summary():
    sc = tool_run_scenarios(default_portfolio().goals[0].inputs.model_dump())
    assert sc["plus_years"]["projection"][-1]["month"] == 84

    summary = tool_summarize_portfolio(calculate_all(default_portfolio()).model_dump())
    assert summary["badge"]["code"] == "high_risk"
    assert summary["conflict"]["level"] == "no_income"
