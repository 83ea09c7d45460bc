from __future__ import annotations

from goal_planner.tools.quant_tools import tool_compute_goal, tool_run_scenarios, tool_summarize_portfolio
from goal_planner.utils.portfolio_ops import add_goal, calculate_all, default_portfolio, set_monthly_income

def main():
    goal = {
        "goal_name": "Master's abroad fund",
        "target_amount": "1500000",
        "years": "5",
        "current_savings": "50000",
        "monthly_contribution": "10000",
        "annual_return": "12",
        "inflation_rate": "5",
    }
    res = tool_compute_goal(goal)
    print("Effective target:", round(res["effective_target"], 2))
    print("Projected total:", round(res["fv_total"], 2))
    print("Coverage:", round(res["coverage"], 4), res["health"]["label"])
    print("Required monthly:", round(res["monthly_required"], 2))
    for label, s in tool_run_scenarios(goal).items():
        print("Scenario:", label, round(s["fv_total"], 2))

    pf = calculate_all(set_monthly_income(add_goal(default_portfolio()), "150000"))
    summary = tool_summarize_portfolio(pf.model_dump())
    print("Badge:", summary["badge"]["label"])
    print("Conflict:", summary["conflict"]["message"])
    for a in summary["allocation"] or []:
        print("Allocation:", a["name"], a["suggested_contribution"])

if __name__ == "__main__":
    main()
