"""
Pure portfolio transitions.

Every function takes the current snapshot and returns a new one; nothing is
mutated in place. Results are only replaced by an explicit calculate call, so
a goal keeps its last computed snapshot while its inputs are being edited.
"""
from __future__ import annotations

from typing import Any, List, Optional

from goal_planner.core.schemas import Goal, Portfolio
from goal_planner.utils.logging import get_logger
from goal_planner.utils.quant_engine import compute_goal_results
from goal_planner.utils.quant_models import GoalInput, RiskProfile

log = get_logger(__name__)

_RISK_RETURN = {"conservative": 8, "moderate": 12, "aggressive": 16}

_RISK_LABEL = {
    "conservative": "Conservative – lower risk, lower expected return.",
    "moderate": "Moderate – balanced risk and return.",
    "aggressive": "Aggressive – higher risk, higher expected return.",
}


def risk_return(profile: RiskProfile) -> int:
    return _RISK_RETURN.get(profile, _RISK_RETURN["moderate"])


def risk_label(profile: RiskProfile) -> str:
    return _RISK_LABEL.get(profile, _RISK_LABEL["moderate"])


def default_goal_input() -> GoalInput:
    return GoalInput(
        goal_name="Master's abroad fund",
        goal_type="Education",
        target_amount="1500000",
        years="5",
        current_savings="50000",
        monthly_contribution="10000",
        annual_return="12",
        inflation_rate="5",
        months_invested="0",
        priority="3",
    )


def default_portfolio(risk_profile: RiskProfile = "moderate", monthly_income: str = "") -> Portfolio:
    return Portfolio(
        goals=[Goal(id=1, inputs=default_goal_input())],
        risk_profile=risk_profile,
        monthly_income=monthly_income,
    )


def next_goal_id(portfolio: Portfolio) -> int:
    return max((g.id for g in portfolio.goals), default=0) + 1


def find_goal(portfolio: Portfolio, goal_id: Optional[int]) -> Optional[Goal]:
    """Goal with `goal_id`, or the first goal when no id is given."""
    if goal_id is None:
        return portfolio.goals[0] if portfolio.goals else None
    for g in portfolio.goals:
        if g.id == goal_id:
            return g
    return None


def _replace_goal(portfolio: Portfolio, goal: Goal) -> Portfolio:
    goals: List[Goal] = [goal if g.id == goal.id else g for g in portfolio.goals]
    return portfolio.model_copy(update={"goals": goals})


def add_goal(portfolio: Portfolio, inputs: Optional[GoalInput] = None) -> Portfolio:
    new_id = next_goal_id(portfolio)
    if inputs is None:
        inputs = default_goal_input().model_copy(update={"goal_name": f"New goal {new_id}"})
    log.debug("Adding goal id=%s", new_id)
    return portfolio.model_copy(update={"goals": [*portfolio.goals, Goal(id=new_id, inputs=inputs)]})


def remove_goal(portfolio: Portfolio, goal_id: int) -> Portfolio:
    """Drop a goal; the last remaining goal is never removed."""
    if len(portfolio.goals) <= 1:
        log.info("Refusing to remove the only goal (id=%s)", goal_id)
        return portfolio
    remaining = [g for g in portfolio.goals if g.id != goal_id]
    if len(remaining) == len(portfolio.goals):
        return portfolio
    return portfolio.model_copy(update={"goals": remaining})


def with_input(goal: Goal, new_input: GoalInput) -> Goal:
    return goal.model_copy(update={"inputs": new_input})


def update_goal_input(portfolio: Portfolio, goal_id: int, **changes: Any) -> Portfolio:
    goal = find_goal(portfolio, goal_id)
    if goal is None:
        return portfolio
    new_input = GoalInput(**{**goal.inputs.model_dump(), **changes})
    return _replace_goal(portfolio, with_input(goal, new_input))


def calculate_goal(goal: Goal) -> Goal:
    results = compute_goal_results(goal.inputs)
    log.debug("Calculated goal id=%s coverage=%.4f", goal.id, results.coverage)
    return goal.model_copy(update={"results": results})


def calculate_goal_in_portfolio(portfolio: Portfolio, goal_id: int) -> Portfolio:
    goal = find_goal(portfolio, goal_id)
    if goal is None:
        return portfolio
    return _replace_goal(portfolio, calculate_goal(goal))


def calculate_all(portfolio: Portfolio) -> Portfolio:
    return portfolio.model_copy(update={"goals": [calculate_goal(g) for g in portfolio.goals]})


def set_risk_profile(portfolio: Portfolio, profile: RiskProfile, goal_id: Optional[int] = None) -> Portfolio:
    """Switch profile and reset the chosen goal's expected return to the profile default."""
    updated = portfolio.model_copy(update={"risk_profile": profile})
    goal = find_goal(updated, goal_id)
    if goal is None:
        return updated
    return update_goal_input(updated, goal.id, annual_return=str(risk_return(profile)))


def set_monthly_income(portfolio: Portfolio, monthly_income: Any) -> Portfolio:
    text = "" if monthly_income is None else str(monthly_income)
    return portfolio.model_copy(update={"monthly_income": text})
