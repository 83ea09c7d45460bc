import streamlit as st
import pandas as pd
import plotly.express as px
import uuid

from goal_planner.agents.portfolio_agent import PortfolioAgent
from goal_planner.core.config import SETTINGS
from goal_planner.core.schemas import PlannerRequest


def render():
    st.subheader("Portfolio dashboard")
    pf = st.session_state["portfolio"]

    req = PlannerRequest(
        request_id=str(uuid.uuid4()),
        session_id=st.session_state["session_id"],
        portfolio=pf,
        currency_symbol=SETTINGS.currency_symbol,
    )
    resp = PortfolioAgent().run(req)

    col_a, col_b = st.columns([0.55, 0.45], gap="large")

    with col_a:
        st.markdown(resp.answer_md)
        for w in resp.warnings:
            st.caption(w)

    with col_b:
        allocation = ((resp.data or {}).get("summary") or {}).get("allocation") or []
        if allocation:
            df = pd.DataFrame(allocation)
            fig = px.pie(df, values="suggested_contribution", names="name", title="Suggested SIP split")
            st.plotly_chart(fig, use_container_width=True)

        rows = [
            {"goal": g.inputs.goal_name or f"Goal {g.id}", "coverage_pct": round(g.results.coverage * 100, 1)}
            for g in pf.goals
            if g.results is not None
        ]
        if rows:
            fig_bar = px.bar(pd.DataFrame(rows), x="goal", y="coverage_pct", title="Coverage by goal (%)")
            st.plotly_chart(fig_bar, use_container_width=True)
        else:
            st.caption("No calculated goals yet.")
