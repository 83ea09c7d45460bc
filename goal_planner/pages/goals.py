import streamlit as st
import pandas as pd
import plotly.express as px
import uuid
from typing import Optional

from goal_planner.agents.goal_agent import GoalAgent
from goal_planner.core.config import SETTINGS
from goal_planner.core.schemas import AgentResponse, Goal, PlannerRequest
from goal_planner.utils.export import advisor_summary, export_csv
from goal_planner.utils.portfolio_ops import (
    add_goal,
    calculate_goal_in_portfolio,
    find_goal,
    remove_goal,
    update_goal_input,
)

_FIELDS = [
    ("goal_name", "Goal name"),
    ("goal_type", "Goal type"),
    ("target_amount", "Target amount (today's money)"),
    ("years", "Years"),
    ("current_savings", "Current savings"),
    ("monthly_contribution", "Monthly SIP"),
    ("annual_return", "Expected return (annual %)"),
    ("inflation_rate", "Inflation (annual %)"),
    ("priority", "Priority (1-5)"),
    ("months_invested", "Contribution streak (months)"),
]


def _projection_frame(goal: Goal) -> pd.DataFrame:
    rows = [{"month": p.month, "label": p.year_label, "value": p.value} for p in goal.results.projection]
    return pd.DataFrame(rows)


def render():
    st.subheader("Goals")
    pf = st.session_state["portfolio"]

    ids = [g.id for g in pf.goals]
    active_id = st.session_state.get("active_goal_id")
    if active_id not in ids:
        active_id = ids[0]

    col_sel, col_add, col_rm = st.columns([0.6, 0.2, 0.2])
    with col_sel:
        active_id = st.selectbox(
            "Goal",
            options=ids,
            index=ids.index(active_id),
            format_func=lambda i: find_goal(pf, i).inputs.goal_name or f"Goal {i}",
        )
    with col_add:
        if st.button("Add goal"):
            pf = add_goal(pf)
            active_id = pf.goals[-1].id
    with col_rm:
        if st.button("Remove goal", disabled=len(pf.goals) <= 1):
            pf = remove_goal(pf, active_id)
            active_id = pf.goals[0].id

    st.session_state["active_goal_id"] = active_id
    goal = find_goal(pf, active_id)

    col_l, col_r = st.columns([0.45, 0.55], gap="large")

    with col_l:
        changes = {}
        for field, label in _FIELDS:
            current = getattr(goal.inputs, field)
            value = st.text_input(label, value=current, key=f"{field}_{goal.id}")
            if value != current:
                changes[field] = value
        if changes:
            pf = update_goal_input(pf, goal.id, **changes)

        if st.button("Calculate", type="primary"):
            pf = calculate_goal_in_portfolio(pf, goal.id)

    st.session_state["portfolio"] = pf
    goal = find_goal(pf, active_id)

    with col_r:
        req = PlannerRequest(
            request_id=str(uuid.uuid4()),
            session_id=st.session_state["session_id"],
            portfolio=pf,
            goal_id=goal.id,
            currency_symbol=SETTINGS.currency_symbol,
        )
        resp: Optional[AgentResponse] = GoalAgent().run(req)
        st.markdown(resp.answer_md)
        if resp.error:
            st.error(resp.error.get("message", "Goal rendering failed"))

        if goal.results and goal.results.projection:
            fig = px.line(_projection_frame(goal), x="label", y="value", title="Projected value (sampled)")
            st.plotly_chart(fig, use_container_width=True)

        st.caption(f"Contribution streak: {goal.inputs.months_invested or '0'} months")

    st.divider()
    st.text_area("Advisor summary", value=advisor_summary(goal, pf.risk_profile, currency_symbol=SETTINGS.currency_symbol), height=220)
    st.download_button("Export CSV", data=export_csv(pf), file_name="goals-dashboard.csv", mime="text/csv")
