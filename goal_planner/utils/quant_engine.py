from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, getcontext
from typing import List, Tuple

from goal_planner.utils.health import score_health
from goal_planner.utils.normalize import normalize_goal_input
from goal_planner.utils.quant_models import GoalInput, GoalResults, NormalizedGoal, ProjectionPoint

getcontext().prec = 28

_ONE = Decimal(1)
_HUNDRED = Decimal(100)
_TWELVE = Decimal(12)


def _f(x: Decimal) -> float:
    return float(x)


def inflation_factor(inflation_pct: Decimal, years: Decimal) -> Decimal:
    if years > 0 and inflation_pct > 0:
        return (_ONE + inflation_pct / _HUNDRED) ** years
    return _ONE


def months_for(years: Decimal) -> int:
    n = int((years * _TWELVE).to_integral_value(rounding=ROUND_HALF_UP))
    return max(1, n)


def monthly_rate(annual_return_pct: Decimal) -> Decimal:
    return annual_return_pct / _HUNDRED / _TWELVE


def future_values(current: Decimal, monthly: Decimal, n_months: int, rm: Decimal) -> Tuple[Decimal, Decimal]:
    """(lump-sum FV, recurring-contribution FV) after n_months at monthly rate rm."""
    if rm == 0:
        return current, monthly * n_months
    growth = (_ONE + rm) ** n_months
    return current * growth, monthly * ((growth - _ONE) / rm)


def solve_required_contribution(effective_target: Decimal, fv_lump: Decimal, n_months: int, rm: Decimal) -> Decimal:
    """Monthly contribution whose annuity FV closes effective_target - fv_lump."""
    needed = effective_target - fv_lump
    if needed <= 0:
        return Decimal(0)
    if rm == 0:
        return needed / n_months
    return needed * rm / ((_ONE + rm) ** n_months - _ONE)


def _year_label(month: int) -> str:
    years = (Decimal(month) / _TWELVE).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{years}y"


def monthly_series(current: Decimal, monthly: Decimal, n_months: int, rm: Decimal) -> List[Decimal]:
    """Balance at the end of every month 1..n_months (contribution after growth)."""
    out: List[Decimal] = []
    value = current
    for _ in range(n_months):
        if rm == 0:
            value += monthly
        else:
            value = value * (_ONE + rm) + monthly
        out.append(value)
    return out


def projection_points(current: Decimal, monthly: Decimal, n_months: int, rm: Decimal) -> List[ProjectionPoint]:
    points: List[ProjectionPoint] = []
    for m, value in enumerate(monthly_series(current, monthly, n_months, rm), start=1):
        if m == 1 or m % 6 == 0 or m == n_months:
            points.append(ProjectionPoint(month=m, year_label=_year_label(m), value=_f(value)))
    return points


def compute_normalized(goal: NormalizedGoal) -> GoalResults:
    effective_target = goal.target_amount * inflation_factor(goal.inflation_rate, goal.years)
    n_months = months_for(goal.years)
    rm = monthly_rate(goal.annual_return)

    fv_lump, fv_sip = future_values(goal.current_savings, goal.monthly_contribution, n_months, rm)
    fv_total = fv_lump + fv_sip
    gap = fv_total - effective_target
    coverage = fv_total / effective_target if effective_target > 0 else Decimal(0)

    required = solve_required_contribution(effective_target, fv_lump, n_months, rm)

    return GoalResults(
        fv_lump=_f(fv_lump),
        fv_sip=_f(fv_sip),
        fv_total=_f(fv_total),
        gap=_f(gap),
        monthly_required=_f(max(Decimal(0), required)),
        projection=projection_points(goal.current_savings, goal.monthly_contribution, n_months, rm),
        health=score_health(_f(coverage), _f(effective_target)),
        coverage=_f(coverage),
        effective_target=_f(effective_target),
    )


def compute_goal_results(inputs: GoalInput) -> GoalResults:
    return compute_normalized(normalize_goal_input(inputs))
