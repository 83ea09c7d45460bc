from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

RiskProfile = Literal["conservative", "moderate", "aggressive"]

ConflictLevel = Literal["no_income", "not_calculated", "extreme", "ambitious", "healthy", "conservative"]


class GoalInput(BaseModel):
    """Raw goal fields exactly as a form would hold them (free text)."""

    model_config = ConfigDict(frozen=True)

    goal_name: str = ""
    goal_type: str = ""
    target_amount: str = ""
    years: str = ""
    current_savings: str = ""
    monthly_contribution: str = ""
    annual_return: str = Field("", description="Expected annual return, percent.")
    inflation_rate: str = Field("", description="Expected annual inflation, percent.")
    months_invested: str = Field("", description="Contribution streak; display only.")
    priority: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        return str(v)


class NormalizedGoal(BaseModel):
    model_config = ConfigDict(frozen=True)

    goal_name: str
    goal_type: str
    target_amount: Decimal
    years: Decimal
    current_savings: Decimal
    monthly_contribution: Decimal
    annual_return: Decimal
    inflation_rate: Decimal
    months_invested: int
    priority: int = Field(..., ge=1, le=5)


class ProjectionPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int
    year_label: str
    value: float


class HealthTier(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    emoji: str
    label: str

    @property
    def display(self) -> str:
        return f"{self.emoji} {self.label}"


class GoalResults(BaseModel):
    model_config = ConfigDict(frozen=True)

    fv_lump: float
    fv_sip: float
    fv_total: float
    gap: float = Field(..., description="fv_total - effective_target; negative means shortfall")
    monthly_required: float = Field(..., ge=0)
    projection: List[ProjectionPoint] = Field(default_factory=list)
    health: HealthTier
    coverage: float = Field(..., description="fv_total / effective_target (0 when no target)")
    effective_target: float


class ScenarioSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    plus_years: GoalResults
    plus_contribution: GoalResults
    reduced_target: GoalResults


class AllocationRow(BaseModel):
    goal_id: int
    name: str
    priority: int
    suggested_contribution: int


class ConflictAssessment(BaseModel):
    level: ConflictLevel
    required_pct: Optional[float] = None
    message: str


class PortfolioSummary(BaseModel):
    total_current_contribution: float
    total_required_contribution: float
    average_coverage: float
    badge: HealthTier
    conflict: ConflictAssessment
    allocation: Optional[List[AllocationRow]] = None
    warnings: List[str] = Field(default_factory=list)
