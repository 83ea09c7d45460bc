from __future__ import annotations

from goal_planner.agents.base_agent import BaseAgent
from goal_planner.core.schemas import AgentResponse, ErrorEnvelope, PlannerRequest
from goal_planner.tools.quant_tools import tool_run_scenarios
from goal_planner.utils.answer_format import format_currency, format_pct
from goal_planner.utils.explain import explain_plan
from goal_planner.utils.export import advisor_summary
from goal_planner.utils.logging import get_logger, set_log_context
from goal_planner.utils.normalize import to_decimal
from goal_planner.utils.portfolio_ops import find_goal

log = get_logger(__name__)


class GoalAgent(BaseAgent):
    name = "goal_agent"

    def run(self, req: PlannerRequest) -> AgentResponse:
        try:
            goal = find_goal(req.portfolio, req.goal_id)
            if goal is None:
                return AgentResponse(
                    agent_name=self.name,
                    answer_md=f"No goal with id `{req.goal_id}` in this portfolio.",
                    warnings=["GOAL_NOT_FOUND"],
                    confidence="low",
                )

            set_log_context(session_id=req.session_id, goal_id=goal.id)
            r = goal.results
            if r is None:
                return AgentResponse(
                    agent_name=self.name,
                    answer_md=f"**{goal.inputs.goal_name or f'Goal {goal.id}'}** has not been calculated yet.",
                    data={"goal_id": goal.id},
                    warnings=["GOAL_NOT_CALCULATED"],
                    confidence="low",
                )

            sym = req.currency_symbol

            def money(x: float) -> str:
                return format_currency(x, sym)

            scenarios = tool_run_scenarios(goal.inputs.model_dump())
            income = float(to_decimal(req.portfolio.monthly_income))
            explanation = explain_plan(
                goal.inputs,
                r,
                req.portfolio.risk_profile,
                income or None,
                currency_symbol=sym,
            )

            scen_lines = [
                f"- **+2 years**: {money(scenarios['plus_years']['fv_total'])} "
                f"({format_pct(scenarios['plus_years']['coverage'])} covered)",
                f"- **+{money(2000)} SIP**: {money(scenarios['plus_contribution']['fv_total'])} "
                f"({format_pct(scenarios['plus_contribution']['coverage'])} covered)",
                f"- **Target −{money(200000)}**: {money(scenarios['reduced_target']['fv_total'])} "
                f"({format_pct(scenarios['reduced_target']['coverage'])} covered)",
            ]

            answer_md = (
                f"## {goal.inputs.goal_name or f'Goal {goal.id}'}\n"
                f"- Health: **{r.health.display}**\n"
                f"- Inflation-adjusted target: **{money(r.effective_target)}**\n"
                f"- Projected total: **{money(r.fv_total)}** "
                f"(savings {money(r.fv_lump)} + SIPs {money(r.fv_sip)})\n"
                f"- Coverage: **{format_pct(r.coverage)}**, gap **{money(r.gap)}**\n"
                f"- Required monthly SIP: **{money(r.monthly_required)}**\n\n"
                "### What if\n"
                + "\n".join(scen_lines)
                + "\n\n### Commentary\n"
                + explanation
                + "\n"
            )

            log.info("Rendered goal %s (%s)", goal.id, r.health.code)
            return AgentResponse(
                agent_name=self.name,
                answer_md=answer_md,
                data={
                    "goal_id": goal.id,
                    "results": r.model_dump(),
                    "scenarios": scenarios,
                    "explanation": explanation,
                    "advisor_summary": advisor_summary(goal, req.portfolio.risk_profile, currency_symbol=sym),
                },
                confidence="high",
            )
        except Exception as e:
            log.exception("GoalAgent failed")
            return AgentResponse(
                agent_name=self.name,
                answer_md="GoalAgent failed.",
                warnings=["AGENT_FAILED"],
                confidence="low",
                error=ErrorEnvelope(code="AGENT_FAILED", message=str(e)).model_dump(),
            )
