from __future__ import annotations

from typing import Any, Dict

from goal_planner.core.schemas import Portfolio
from goal_planner.utils.aggregate import summarize_portfolio
from goal_planner.utils.quant_engine import compute_goal_results
from goal_planner.utils.quant_models import GoalInput
from goal_planner.utils.scenarios import run_scenarios

# common aliases -> canonical GoalInput fields
_ALIASES = {
    "name": "goal_name",
    "type": "goal_type",
    "target": "target_amount",
    "time_horizon_years": "years",
    "initial_investment": "current_savings",
    "monthly_investment": "monthly_contribution",
    "monthly_sip": "monthly_contribution",
    "expected_return": "annual_return",
    "expected_return_annual": "annual_return",
    "inflation_pct": "inflation_rate",
    "inflation_annual": "inflation_rate",
    "streak_months": "months_invested",
}


def goal_input_from_payload(payload: Dict[str, Any]) -> GoalInput:
    p = dict(payload or {})
    for alias, field in _ALIASES.items():
        if field not in p and alias in p:
            p[field] = p[alias]
    known = set(GoalInput.model_fields)
    return GoalInput(**{k: v for k, v in p.items() if k in known})


def tool_compute_goal(payload: Dict[str, Any]) -> Dict[str, Any]:
    return compute_goal_results(goal_input_from_payload(payload)).model_dump()


def tool_run_scenarios(payload: Dict[str, Any]) -> Dict[str, Any]:
    return run_scenarios(goal_input_from_payload(payload)).model_dump()


def tool_summarize_portfolio(payload: Dict[str, Any]) -> Dict[str, Any]:
    pf = Portfolio.model_validate(payload)
    return summarize_portfolio(pf).model_dump()
