from __future__ import annotations

from goal_planner.agents.base_agent import BaseAgent
from goal_planner.core.schemas import AgentResponse, ErrorEnvelope, PlannerRequest
from goal_planner.tools.quant_tools import tool_summarize_portfolio
from goal_planner.utils.answer_format import format_currency, format_pct
from goal_planner.utils.logging import get_logger, set_log_context
from goal_planner.utils.quant_models import HealthTier

log = get_logger(__name__)


class PortfolioAgent(BaseAgent):
    name = "portfolio_agent"

    def run(self, req: PlannerRequest) -> AgentResponse:
        try:
            set_log_context(session_id=req.session_id)
            summary = tool_summarize_portfolio(req.portfolio.model_dump())
            sym = req.currency_symbol

            badge = HealthTier.model_validate(summary["badge"])
            allocation = summary.get("allocation")
            if allocation:
                alloc_lines = [
                    f"- **{a['name']}** (priority {a['priority']}): {format_currency(a['suggested_contribution'], sym)}"
                    for a in allocation
                ]
            else:
                alloc_lines = ["- (add a monthly income to get suggestions)"]

            answer_md = (
                "## Portfolio overview\n"
                f"- Badge: **{badge.display}**\n"
                f"- Goals: **{len(req.portfolio.goals)}**\n"
                f"- Current total SIP: **{format_currency(summary['total_current_contribution'], sym)}**\n"
                f"- Required total SIP: **{format_currency(summary['total_required_contribution'], sym)}**\n"
                f"- Average coverage: **{format_pct(summary['average_coverage'])}**\n\n"
                "### Income check\n"
                f"{summary['conflict']['message']}\n\n"
                "### Suggested split (40% of income, by priority)\n"
                + "\n".join(alloc_lines)
                + "\n"
            )

            warnings = summary.get("warnings") or []
            confidence = "high" if not warnings else "medium"
            return AgentResponse(
                agent_name=self.name,
                answer_md=answer_md,
                data={"summary": summary},
                warnings=warnings,
                confidence=confidence,
            )
        except Exception as e:
            log.exception("PortfolioAgent failed")
            return AgentResponse(
                agent_name=self.name,
                answer_md="PortfolioAgent failed.",
                warnings=["AGENT_FAILED"],
                confidence="low",
                error=ErrorEnvelope(code="AGENT_FAILED", message=str(e)).model_dump(),
            )
