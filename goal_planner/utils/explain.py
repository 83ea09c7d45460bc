"""
Rule-based plan commentary.

The text is picked from fixed templates keyed on the coverage tier, the gap
between required and current SIP, the risk profile and (optionally) how much
of the monthly income the goal uses. Same inputs, same text.
"""
from __future__ import annotations

from typing import Optional

from goal_planner.utils.answer_format import format_currency
from goal_planner.utils.normalize import to_decimal
from goal_planner.utils.quant_models import GoalInput, GoalResults, RiskProfile

# Surplus (negative diff) beyond which an on-track goal counts as overfunded.
OVERFUND_MARGIN = -100.0

_RISK_TEXT = {
    "conservative": "You're using a conservative profile, which prioritises stability over high returns.",
    "moderate": "You're using a moderate profile, which balances risk and growth.",
    "aggressive": "You're using an aggressive profile, which relies on higher market returns and more volatility.",
}


def risk_text(risk_profile: RiskProfile) -> str:
    return _RISK_TEXT.get(risk_profile, _RISK_TEXT["aggressive"])


def income_note(current_sip: float, monthly_income: Optional[float]) -> str:
    if not monthly_income or monthly_income <= 0:
        return ""
    pct = current_sip / monthly_income * 100
    return f" This single goal currently uses about {pct:.1f}% of your monthly income."


def explain_plan(
    inputs: GoalInput,
    results: GoalResults,
    risk_profile: RiskProfile,
    monthly_income: Optional[float] = None,
    *,
    currency_symbol: str = "₹",
) -> str:
    current_sip = float(to_decimal(inputs.monthly_contribution))
    coverage = results.coverage
    diff = results.monthly_required - current_sip

    risk = risk_text(risk_profile)
    tail = f"{risk}{income_note(current_sip, monthly_income)}"

    def money(x: float) -> str:
        return format_currency(x, currency_symbol)

    if results.effective_target <= 0:
        return (
            "You haven't set a proper inflation-adjusted target yet. Define a realistic goal amount "
            f"and duration so the planner has something to measure against. {risk}"
        )

    if coverage < 0.5:
        return (
            "Right now your plan funds less than half of the inflation-adjusted target. Increase the "
            f"monthly contribution, extend the time horizon, or lower the goal. {tail}"
        )

    if coverage < 0.8:
        if diff > 0:
            return (
                f"You're underfunded: your current SIP of {money(current_sip)} gets you part of the way, "
                f"but you need around {money(diff)} more per month to fully cover this "
                f"inflation-adjusted goal. {tail}"
            )
        return (
            "Your plan is underfunded but not hopeless. A slightly higher SIP, a longer duration or a "
            f"trimmed goal amount can push it into the on-track zone. {tail}"
        )

    if coverage < 1.0:
        if diff > 0:
            return (
                f"You're close to the finish line. Increase your monthly SIP by about {money(diff)} "
                f"or extend the duration a little to comfortably meet the inflation-adjusted target. {tail}"
            )
        return (
            "This plan is almost hitting your inflation-adjusted target. Stay consistent and avoid "
            f"panic-selling during market dips. {tail}"
        )

    if coverage < 1.3:
        if diff < OVERFUND_MARGIN:
            return (
                "You're comfortably on track and may be slightly overfunding this goal. You could reduce "
                f"the SIP or redirect some surplus towards another goal. {tail}"
            )
        return f"You're on track to meet this goal. Keep the SIP going and avoid impulsive changes. {tail}"

    return (
        "You're heavily overfunding this goal relative to the inflation-adjusted target. You can afford "
        f"to lower this SIP and redirect money towards other goals. {tail}"
    )
