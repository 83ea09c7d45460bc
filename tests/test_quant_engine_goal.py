from decimal import Decimal

import pytest

from goal_planner.utils.quant_engine import (
    compute_goal_results,
    future_values,
    months_for,
    monthly_rate,
    solve_required_contribution,
)
from goal_planner.utils.quant_models import GoalInput


def _goal(**kw) -> GoalInput:
    base = dict(
        target_amount="1500000",
        years="5",
        current_savings="50000",
        monthly_contribution="10000",
        annual_return="12",
        inflation_rate="5",
    )
    base.update(kw)
    return GoalInput(**base)


def test_reference_scenario():
    out = compute_goal_results(_goal())
    assert out.effective_target == pytest.approx(1_914_422.34, abs=0.05)
    assert out.fv_lump == pytest.approx(90_834.83, abs=0.05)
    assert out.fv_sip == pytest.approx(816_696.70, abs=0.05)
    assert out.fv_total == pytest.approx(907_531.53, abs=0.05)
    assert out.coverage == pytest.approx(0.47405, abs=1e-4)
    assert out.gap == pytest.approx(-1_006_890.81, abs=0.05)
    assert out.health.code == "very_weak"


def test_reference_required_contribution_closes_gap():
    out = compute_goal_results(_goal())
    rm = monthly_rate(Decimal(12))
    lump, sip = future_values(Decimal(50000), Decimal(str(out.monthly_required)), 60, rm)
    assert float(lump + sip) == pytest.approx(out.effective_target, rel=1e-9)


def test_zero_return_is_linear():
    out = compute_goal_results(
        GoalInput(target_amount="0", years="1", current_savings="10000", monthly_contribution="1000", annual_return="0")
    )
    assert out.fv_lump == 10000
    assert out.fv_sip == 12000
    assert out.fv_total == 22000
    assert out.coverage == 0
    assert out.health.code == "undefined"
    assert out.monthly_required == 0


def test_zero_return_required_is_even_split():
    out = compute_goal_results(GoalInput(target_amount="24000", years="2", annual_return="0"))
    assert out.monthly_required == pytest.approx(1000)


def test_already_funded_needs_no_contribution():
    for ret in ("0", "8"):
        out = compute_goal_results(
            GoalInput(target_amount="100000", years="1", current_savings="150000", monthly_contribution="5000", annual_return=ret)
        )
        assert out.monthly_required == 0


def test_solver_clamps_to_zero():
    assert solve_required_contribution(Decimal(100000), Decimal(150000), 12, Decimal("0.01")) == 0
    assert solve_required_contribution(Decimal(100000), Decimal(100000), 12, Decimal(0)) == 0


def test_months_rounding():
    assert months_for(Decimal(0)) == 1
    assert months_for(Decimal("0.01")) == 1
    assert months_for(Decimal("0.125")) == 2  # 1.5 rounds half-up
    assert months_for(Decimal("2.04")) == 24
    assert months_for(Decimal(5)) == 60


def test_no_inflation_when_rate_or_years_not_positive():
    assert compute_goal_results(_goal(inflation_rate="0")).effective_target == 1_500_000
    assert compute_goal_results(_goal(inflation_rate="-3")).effective_target == 1_500_000
    assert compute_goal_results(_goal(years="0")).effective_target == 1_500_000


def test_projection_sampling_points():
    out = compute_goal_results(_goal())
    months = [p.month for p in out.projection]
    assert months == [1, 6, 12, 18, 24, 30, 36, 42, 48, 54, 60]
    assert out.projection[0].year_label == "0.1y"
    assert out.projection[1].year_label == "0.5y"
    assert out.projection[-1].year_label == "5.0y"
    assert out.projection[-1].value == pytest.approx(out.fv_total, rel=1e-12)


def test_projection_includes_final_month_off_grid():
    out = compute_goal_results(_goal(years="0.6"))  # 7.2 -> 7 months
    assert [p.month for p in out.projection] == [1, 6, 7]
    assert out.projection[-1].year_label == "0.6y"


def test_projection_zero_return_values():
    out = compute_goal_results(GoalInput(years="1", current_savings="100", monthly_contribution="10", annual_return="0"))
    assert [(p.month, p.value) for p in out.projection] == [(1, 110.0), (6, 160.0), (12, 220.0)]


def test_coverage_non_decreasing_in_contribution_and_savings():
    sips = [compute_goal_results(_goal(monthly_contribution=str(s))).coverage for s in (0, 1000, 5000, 20000)]
    assert sips == sorted(sips)
    savings = [compute_goal_results(_goal(current_savings=str(s))).coverage for s in (0, 10000, 500000)]
    assert savings == sorted(savings)


def test_garbage_input_does_not_raise():
    out = compute_goal_results(GoalInput(target_amount="lots", years="", monthly_contribution="abc"))
    assert out.fv_total == 0
    assert out.health.code == "undefined"
    assert len(out.projection) == 1


def test_huge_exponent_input_resolves_to_zero():
    out = compute_goal_results(GoalInput(target_amount="1e1000000", years="5", inflation_rate="5"))
    assert out.effective_target == 0
    assert out.health.code == "undefined"
