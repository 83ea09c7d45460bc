from __future__ import annotations

from decimal import Decimal

from goal_planner.utils.normalize import to_decimal
from goal_planner.utils.quant_engine import compute_goal_results
from goal_planner.utils.quant_models import GoalInput, ScenarioSet

EXTRA_YEARS = Decimal(2)
EXTRA_CONTRIBUTION = Decimal(2000)
TARGET_CUT = Decimal(200000)


def run_scenarios(inputs: GoalInput) -> ScenarioSet:
    """Quick what-ifs, each changing exactly one field of a copy of `inputs`."""
    longer = inputs.model_copy(update={"years": str(to_decimal(inputs.years) + EXTRA_YEARS)})
    more_sip = inputs.model_copy(
        update={"monthly_contribution": str(to_decimal(inputs.monthly_contribution) + EXTRA_CONTRIBUTION)}
    )
    smaller = inputs.model_copy(
        update={"target_amount": str(max(Decimal(0), to_decimal(inputs.target_amount) - TARGET_CUT))}
    )

    return ScenarioSet(
        plus_years=compute_goal_results(longer),
        plus_contribution=compute_goal_results(more_sip),
        reduced_target=compute_goal_results(smaller),
    )
