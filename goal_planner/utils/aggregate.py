from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from goal_planner.core.schemas import Portfolio
from goal_planner.utils.answer_format import round_half_up
from goal_planner.utils.health import portfolio_badge
from goal_planner.utils.normalize import normalize_priority, to_decimal
from goal_planner.utils.quant_models import AllocationRow, ConflictAssessment, PortfolioSummary

# Share of monthly income the allocation suggestion is allowed to spend.
SAFE_INCOME_SHARE = Decimal("0.4")


def total_current_contribution(portfolio: Portfolio) -> float:
    return float(sum((to_decimal(g.inputs.monthly_contribution) for g in portfolio.goals), Decimal(0)))


def total_required_contribution(portfolio: Portfolio) -> float:
    return sum((max(0.0, g.results.monthly_required) for g in portfolio.goals if g.results is not None), 0.0)


def average_coverage(portfolio: Portfolio) -> float:
    covs = [g.results.coverage for g in portfolio.goals if g.results is not None and g.results.coverage > 0]
    if not covs:
        return 0.0
    return sum(covs) / len(covs)


def assess_income_conflict(total_required: float, monthly_income: float) -> ConflictAssessment:
    if monthly_income <= 0:
        return ConflictAssessment(
            level="no_income",
            message="Add your monthly income to see whether your total SIPs are realistic.",
        )
    if not total_required:
        return ConflictAssessment(
            level="not_calculated",
            message="Calculate your goals to see whether the plan clashes with your income.",
        )

    pct = total_required * 100 / monthly_income
    pct_txt = f"{round_half_up(pct, 1)}%"

    if pct > 60:
        return ConflictAssessment(
            level="extreme",
            required_pct=pct,
            message=(
                f"You'd need about {pct_txt} of your income in SIPs. Mathematically possible, "
                "practically extreme. Reduce some goals or extend timelines."
            ),
        )
    if pct > 40:
        return ConflictAssessment(
            level="ambitious",
            required_pct=pct,
            message=f"Total required SIP is about {pct_txt} of your income. Ambitious but feasible with discipline.",
        )
    if pct > 20:
        return ConflictAssessment(
            level="healthy",
            required_pct=pct,
            message=f"Total required SIP is about {pct_txt} of your income. That's a healthy range for long-term goals.",
        )
    return ConflictAssessment(
        level="conservative",
        required_pct=pct,
        message=f"Total required SIP is only {pct_txt} of your income. Either the goals are small or you're playing it very safe.",
    )


def recommend_allocation(portfolio: Portfolio, monthly_income: float) -> Optional[List[AllocationRow]]:
    """Split 40% of income across goals in proportion to their priority."""
    if monthly_income <= 0 or not portfolio.goals:
        return None

    cap = Decimal(str(monthly_income)) * SAFE_INCOME_SHARE
    priorities = [normalize_priority(g.inputs.priority) for g in portfolio.goals]
    total_priority = sum(priorities)

    rows: List[AllocationRow] = []
    for g, p in zip(portfolio.goals, priorities):
        share = Decimal(p) / Decimal(total_priority) * cap
        rows.append(
            AllocationRow(
                goal_id=g.id,
                name=g.inputs.goal_name.strip() or f"Goal {g.id}",
                priority=p,
                suggested_contribution=int(round_half_up(share)),
            )
        )
    return rows


def summarize_portfolio(portfolio: Portfolio) -> PortfolioSummary:
    income = float(to_decimal(portfolio.monthly_income))
    required = total_required_contribution(portfolio)
    avg = average_coverage(portfolio)

    warnings: List[str] = []
    pending = [g.id for g in portfolio.goals if g.results is None]
    if pending:
        warnings.append(f"Goals without calculated results: {', '.join(str(i) for i in pending)}")

    return PortfolioSummary(
        total_current_contribution=total_current_contribution(portfolio),
        total_required_contribution=required,
        average_coverage=avg,
        badge=portfolio_badge(avg),
        conflict=assess_income_conflict(required, income),
        allocation=recommend_allocation(portfolio, income),
        warnings=warnings,
    )
