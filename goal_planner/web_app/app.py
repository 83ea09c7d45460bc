import streamlit as st
import uuid
from goal_planner.core.config import SETTINGS
from goal_planner.utils.logging import setup_logging, set_log_context
from goal_planner.utils.portfolio_ops import risk_label, set_monthly_income, set_risk_profile
from goal_planner.utils.storage import JsonFileStore, load_portfolio
from goal_planner.pages import goals, dashboard

# Setup logging
setup_logging(SETTINGS.log_level)

st.set_page_config(page_title="Goal Planner", layout="wide")

RISK_OPTIONS = ["conservative", "moderate", "aggressive"]


# Session initialization
def _init_session() -> None:
    st.session_state.setdefault("session_id", str(uuid.uuid4()))
    if "store" not in st.session_state:
        st.session_state["store"] = JsonFileStore(SETTINGS.storage_path, key=SETTINGS.storage_key)
    if "portfolio" not in st.session_state:
        pf = load_portfolio(st.session_state["store"])
        st.session_state["portfolio"] = pf
        st.session_state["active_goal_id"] = pf.goals[0].id
    set_log_context(session_id=st.session_state["session_id"])


_init_session()

# Sidebar for risk profile + income
with st.sidebar:
    st.subheader("Profile")
    pf = st.session_state["portfolio"]

    risk = st.select_slider("Risk profile", options=RISK_OPTIONS, value=pf.risk_profile)
    st.caption(risk_label(risk))
    if risk != pf.risk_profile:
        pf = set_risk_profile(pf, risk, st.session_state.get("active_goal_id"))

    income = st.text_input("Monthly income", value=pf.monthly_income)
    if income != pf.monthly_income:
        pf = set_monthly_income(pf, income)

    st.session_state["portfolio"] = pf
    st.divider()
    st.caption(f"Session: {st.session_state['session_id']}")

# Main UI
st.title("Goal-Based Investment Planner")

tab_goals, tab_dashboard = st.tabs(["Goals", "Dashboard"])

with tab_goals:
    goals.render()

with tab_dashboard:
    dashboard.render()

try:
    st.session_state["store"].save(st.session_state["portfolio"])
except OSError as e:
    st.caption(f"Could not save planner state: {e}")
