from __future__ import annotations

from datetime import datetime, UTC
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from goal_planner.utils.quant_models import GoalInput, GoalResults, RiskProfile


# -------------------------
# Goals / Portfolio
# -------------------------

class Goal(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    inputs: GoalInput = Field(default_factory=GoalInput)
    results: Optional[GoalResults] = None


class Portfolio(BaseModel):
    """Full planner snapshot. Every transition returns a new instance."""

    model_config = ConfigDict(frozen=True)

    goals: List[Goal] = Field(default_factory=list)
    risk_profile: RiskProfile = "moderate"
    monthly_income: str = ""


# -------------------------
# Export
# -------------------------

class ExportRow(BaseModel):
    """One flattened goal row; empty strings where a value is not available."""

    goal_id: int = Field(..., serialization_alias="Goal ID")
    goal_name: str = Field("", serialization_alias="Goal Name")
    goal_type: str = Field("", serialization_alias="Goal Type")
    priority: str = Field("", serialization_alias="Priority")
    base_target: str = Field("", serialization_alias="Base Target")
    inflation_rate: str = Field("", serialization_alias="Inflation Rate")
    effective_target: str = Field("", serialization_alias="Inflation Adjusted Target")
    years: str = Field("", serialization_alias="Years")
    current_savings: str = Field("", serialization_alias="Current Savings")
    monthly_contribution: str = Field("", serialization_alias="Monthly SIP")
    expected_return: str = Field("", serialization_alias="Expected Return")
    projected_total: str = Field("", serialization_alias="Projected Total")
    coverage_pct: str = Field("", serialization_alias="Coverage %")
    health_label: str = Field("", serialization_alias="Health Label")


# -------------------------
# Agent requests / responses
# -------------------------

class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    retriable: bool = False


class PlannerRequest(BaseModel):
    request_id: str
    session_id: str = "local"

    portfolio: Portfolio = Field(default_factory=Portfolio)
    # goal the request is about; agents fall back to the first goal
    goal_id: Optional[int] = None
    currency_symbol: str = "₹"

    ts: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AgentResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    agent_name: str
    answer_md: str
    data: Dict[str, Any] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)
    confidence: Literal["high", "medium", "low"] = "medium"
    error: Optional[Dict[str, Any]] = None
