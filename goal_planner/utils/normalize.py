from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from goal_planner.utils.quant_models import GoalInput, NormalizedGoal

PRIORITY_MIN = 1
PRIORITY_MAX = 5


def to_decimal(value: Any) -> Decimal:
    """Parse a form value into a finite Decimal. Anything else becomes 0.

    Magnitudes a double cannot hold (e.g. "1e1000000") count as non-finite.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, Decimal):
        d = value
    else:
        text = str(value).strip()
        if not text:
            return Decimal(0)
        try:
            d = Decimal(text)
        except (InvalidOperation, ValueError):
            return Decimal(0)
    if not d.is_finite() or not math.isfinite(float(d)):
        return Decimal(0)
    return d


def to_int(value: Any) -> int:
    return int(to_decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def clamp_priority(p: int) -> int:
    return max(PRIORITY_MIN, min(PRIORITY_MAX, p))


def normalize_priority(value: Any) -> int:
    return clamp_priority(to_int(value))


def normalize_goal_input(inputs: GoalInput) -> NormalizedGoal:
    return NormalizedGoal(
        goal_name=inputs.goal_name.strip(),
        goal_type=inputs.goal_type.strip(),
        target_amount=to_decimal(inputs.target_amount),
        years=to_decimal(inputs.years),
        current_savings=to_decimal(inputs.current_savings),
        monthly_contribution=to_decimal(inputs.monthly_contribution),
        annual_return=to_decimal(inputs.annual_return),
        inflation_rate=to_decimal(inputs.inflation_rate),
        months_invested=to_int(inputs.months_invested),
        priority=normalize_priority(inputs.priority),
    )
