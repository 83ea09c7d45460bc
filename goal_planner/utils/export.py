from __future__ import annotations

import csv
from typing import List

import pandas as pd

from goal_planner.core.schemas import ExportRow, Goal, Portfolio
from goal_planner.utils.answer_format import format_currency, format_pct, round_half_up
from goal_planner.utils.normalize import to_decimal

EXPORT_COLUMNS = [
    "Goal ID",
    "Goal Name",
    "Goal Type",
    "Priority",
    "Base Target",
    "Inflation Rate",
    "Inflation Adjusted Target",
    "Years",
    "Current Savings",
    "Monthly SIP",
    "Expected Return",
    "Projected Total",
    "Coverage %",
    "Health Label",
]


def _rounded(value, places: int = 0) -> str:
    d = round_half_up(value, places)
    if not d.is_finite():
        return ""
    return str(int(d)) if places == 0 else str(d)


def _whole(value) -> str:
    return _rounded(value) if value else ""


def export_row(goal: Goal) -> ExportRow:
    i = goal.inputs
    r = goal.results
    return ExportRow(
        goal_id=goal.id,
        goal_name=i.goal_name,
        goal_type=i.goal_type,
        priority=i.priority,
        base_target=_whole(to_decimal(i.target_amount)),
        inflation_rate=i.inflation_rate,
        effective_target=_whole(r.effective_target) if r else "",
        years=i.years,
        current_savings=i.current_savings,
        monthly_contribution=i.monthly_contribution,
        expected_return=i.annual_return,
        projected_total=_rounded(r.fv_total) if r else "",
        coverage_pct=_rounded(r.coverage * 100, 1) if r else "",
        health_label=r.health.label if r else "",
    )


def export_rows(portfolio: Portfolio) -> List[ExportRow]:
    return [export_row(g) for g in portfolio.goals]


def export_frame(portfolio: Portfolio) -> pd.DataFrame:
    rows = [r.model_dump(by_alias=True) for r in export_rows(portfolio)]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_csv(portfolio: Portfolio) -> str:
    """CSV text for all goals; every cell is quoted."""
    return export_frame(portfolio).to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")


def advisor_summary(goal: Goal, risk_profile: str, *, currency_symbol: str = "₹") -> str:
    """Plain-text brief of one goal, suitable for pasting to an adviser."""
    i = goal.inputs
    r = goal.results

    def money(x) -> str:
        return format_currency(x, currency_symbol)

    lines = [
        f"Goal: {i.goal_name or 'Unnamed goal'}",
        f"Type: {i.goal_type or 'Not specified'}",
        f"Time horizon: {i.years or '-'} years",
        f"Base target today: {money(to_decimal(i.target_amount))}" if i.target_amount else "",
        f"Inflation-adjusted target at {i.inflation_rate or 0}%: {money(r.effective_target)}" if r else "",
        f"Current savings: {money(to_decimal(i.current_savings))}" if i.current_savings else "",
        f"Current monthly SIP: {money(to_decimal(i.monthly_contribution))}" if i.monthly_contribution else "",
        f"Projected total at {i.annual_return or 0}%: {money(r.fv_total)}" if r else "",
        f"Coverage vs inflation-adjusted target: {format_pct(r.coverage)}" if r else "",
        f"Required monthly SIP to fully fund: {money(max(0.0, r.monthly_required))}" if r else "",
        f"Risk profile: {risk_profile}",
    ]
    return "\n".join(line for line in lines if line.strip())
