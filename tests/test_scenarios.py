import pytest

from goal_planner.core.schemas import Goal
from goal_planner.utils.portfolio_ops import calculate_goal, default_goal_input
from goal_planner.utils.quant_engine import compute_goal_results
from goal_planner.utils.scenarios import run_scenarios


def test_each_scenario_changes_one_field():
    base = default_goal_input()
    sc = run_scenarios(base)

    assert sc.plus_years.projection[-1].month == 84
    assert sc.plus_years == compute_goal_results(base.model_copy(update={"years": "7"}))

    assert sc.plus_contribution.fv_lump == pytest.approx(compute_goal_results(base).fv_lump)
    assert sc.plus_contribution == compute_goal_results(base.model_copy(update={"monthly_contribution": "12000"}))

    assert sc.reduced_target.effective_target == pytest.approx(1_300_000 * 1.05**5)
    assert sc.reduced_target.fv_total == pytest.approx(compute_goal_results(base).fv_total)


def test_reduced_target_floors_at_zero():
    base = default_goal_input().model_copy(update={"target_amount": "150000"})
    sc = run_scenarios(base)
    assert sc.reduced_target.effective_target == 0
    assert sc.reduced_target.health.code == "undefined"


def test_scenarios_leave_goal_untouched():
    goal = calculate_goal(Goal(id=1, inputs=default_goal_input()))
    before = goal.model_dump()
    run_scenarios(goal.inputs)
    assert goal.model_dump() == before
    assert goal.inputs.years == "5"


def test_scenarios_on_garbage_inputs():
    sc = run_scenarios(default_goal_input().model_copy(update={"years": "soon", "monthly_contribution": ""}))
    # "soon" -> 0 years -> +2 years gives 24 months
    assert sc.plus_years.projection[-1].month == 24
    assert sc.plus_contribution.fv_sip > 0
