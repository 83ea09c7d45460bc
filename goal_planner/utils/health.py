from __future__ import annotations

from typing import List, Tuple

from goal_planner.utils.quant_models import HealthTier

UNDEFINED = HealthTier(code="undefined", emoji="🤷", label="Set a goal first")

# (exclusive upper bound, tier); coverage at or above the last bound falls through.
_GOAL_TIERS: List[Tuple[float, HealthTier]] = [
    (0.5, HealthTier(code="very_weak", emoji="😱", label="Very weak – huge shortfall")),
    (0.8, HealthTier(code="needs_work", emoji="😬", label="Needs work – underfunded")),
    (1.0, HealthTier(code="almost_there", emoji="🙂", label="Almost there – close to target")),
    (1.3, HealthTier(code="on_track", emoji="😎", label="On track – goal covered")),
]
OVERACHIEVER = HealthTier(code="overachiever", emoji="🐐", label="Overachiever – well above target")

GETTING_STARTED = HealthTier(code="getting_started", emoji="🐣", label="Getting started")
_PORTFOLIO_TIERS: List[Tuple[float, HealthTier]] = [
    (0.7, HealthTier(code="high_risk", emoji="🔥", label="High risk of shortfall")),
    (1.0, HealthTier(code="almost_there", emoji="🙂", label="Almost there")),
    (1.2, HealthTier(code="on_track", emoji="✅", label="On track")),
]
OVERPREPARED = HealthTier(code="overprepared", emoji="🐐", label="Overprepared")


def score_health(coverage: float, effective_target: float) -> HealthTier:
    if effective_target <= 0:
        return UNDEFINED
    for upper, tier in _GOAL_TIERS:
        if coverage < upper:
            return tier
    return OVERACHIEVER


def portfolio_badge(average_coverage: float) -> HealthTier:
    """Badge for the mean coverage of calculated goals; 0 means none qualified."""
    if average_coverage <= 0:
        return GETTING_STARTED
    for upper, tier in _PORTFOLIO_TIERS:
        if average_coverage < upper:
            return tier
    return OVERPREPARED
