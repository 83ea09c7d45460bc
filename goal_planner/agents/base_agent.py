from __future__ import annotations

from abc import ABC, abstractmethod

from goal_planner.core.schemas import PlannerRequest, AgentResponse


class BaseAgent(ABC):
    """All planner agents implement this interface."""

    name: str

    @abstractmethod
    def run(self, req: PlannerRequest) -> AgentResponse:
        raise NotImplementedError
