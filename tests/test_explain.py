import pytest

from goal_planner.utils.explain import explain_plan, income_note, risk_text
from goal_planner.utils.health import score_health
from goal_planner.utils.quant_models import GoalInput, GoalResults

INPUTS = GoalInput(goal_name="Car", monthly_contribution="1000")


def _results(coverage: float, required: float, effective_target: float = 100000.0) -> GoalResults:
    fv_total = coverage * effective_target
    return GoalResults(
        fv_lump=0.0,
        fv_sip=fv_total,
        fv_total=fv_total,
        gap=fv_total - effective_target,
        monthly_required=required,
        projection=[],
        health=score_health(coverage, effective_target),
        coverage=coverage,
        effective_target=effective_target,
    )


@pytest.mark.parametrize(
    "coverage,required,phrase",
    [
        (0.4, 3000, "less than half"),
        (0.5, 1500, "you need around ₹500 more per month"),
        (0.6, 900, "not hopeless"),
        (0.9, 1200, "Increase your monthly SIP by about ₹200"),
        (0.9, 1000, "almost hitting"),
        (0.8, 800, "almost hitting"),
        (1.0, 1000, "on track to meet this goal"),
        (1.1, 850, "overfunding this goal"),
        (1.1, 950, "on track to meet this goal"),
        (1.1, 900, "on track to meet this goal"),
        (1.3, 0, "heavily overfunding"),
    ],
)
def test_template_selection(coverage, required, phrase):
    text = explain_plan(INPUTS, _results(coverage, required), "moderate")
    assert phrase in text
    assert text.endswith(risk_text("moderate"))


def test_no_target_branch_skips_income_note():
    text = explain_plan(INPUTS, _results(0.0, 0, effective_target=0.0), "conservative", 50000.0)
    assert "haven't set a proper" in text
    assert "monthly income" not in text
    assert text.endswith(risk_text("conservative"))


def test_income_note_appended():
    text = explain_plan(INPUTS, _results(1.1, 1000), "aggressive", 20000.0)
    assert text.endswith("This single goal currently uses about 5.0% of your monthly income.")
    assert risk_text("aggressive") in text


def test_income_note_empty_without_income():
    assert income_note(1000.0, None) == ""
    assert income_note(1000.0, 0.0) == ""
    assert income_note(1000.0, -5.0) == ""


def test_risk_texts_differ():
    texts = {risk_text(p) for p in ("conservative", "moderate", "aggressive")}
    assert len(texts) == 3


def test_deterministic_and_custom_symbol():
    a = explain_plan(INPUTS, _results(0.6, 2500), "moderate", 40000.0, currency_symbol="$")
    b = explain_plan(INPUTS, _results(0.6, 2500), "moderate", 40000.0, currency_symbol="$")
    assert a == b
    assert "$1,500 more per month" in a
    assert "current SIP of $1,000" in a
