from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional

from goal_planner.core.config import SETTINGS
from goal_planner.utils.aggregate import summarize_portfolio
from goal_planner.utils.answer_format import format_currency, format_pct
from goal_planner.utils.explain import explain_plan
from goal_planner.utils.export import advisor_summary, export_csv
from goal_planner.utils.logging import setup_logging
from goal_planner.utils.normalize import to_decimal
from goal_planner.utils.portfolio_ops import calculate_all, find_goal
from goal_planner.utils.quant_engine import compute_goal_results
from goal_planner.utils.quant_models import GoalInput
from goal_planner.utils.scenarios import run_scenarios
from goal_planner.utils.storage import JsonFileStore, load_portfolio


def _store(args: argparse.Namespace) -> JsonFileStore:
    return JsonFileStore(args.state or SETTINGS.storage_path, key=args.key or SETTINGS.storage_key)


def cmd_project(args: argparse.Namespace) -> int:
    inputs = GoalInput(
        goal_name=args.name,
        target_amount=args.target,
        years=args.years,
        current_savings=args.savings,
        monthly_contribution=args.sip,
        annual_return=args.annual_return,
        inflation_rate=args.inflation,
    )
    res = compute_goal_results(inputs)

    if args.json:
        out = {"results": res.model_dump()}
        if args.scenarios:
            out["scenarios"] = run_scenarios(inputs).model_dump()
        print(json.dumps(out, indent=2, ensure_ascii=False))
        return 0

    sym = SETTINGS.currency_symbol
    print(res.health.display)
    print(f"Inflation-adjusted target: {format_currency(res.effective_target, sym)}")
    print(f"Projected total:          {format_currency(res.fv_total, sym)}")
    print(f"Coverage:                 {format_pct(res.coverage)}")
    print(f"Gap:                      {format_currency(res.gap, sym)}")
    print(f"Required monthly SIP:     {format_currency(res.monthly_required, sym)}")
    if args.scenarios:
        sc = run_scenarios(inputs)
        print(f"+2 years:                 {format_currency(sc.plus_years.fv_total, sym)}")
        print(f"+2000 SIP:                {format_currency(sc.plus_contribution.fv_total, sym)}")
        print(f"Target -200000:           {format_currency(sc.reduced_target.fv_total, sym)}")
    return 0


def cmd_summary(args: argparse.Namespace) -> int:
    pf = calculate_all(load_portfolio(_store(args)))
    s = summarize_portfolio(pf)

    if args.json:
        print(s.model_dump_json(indent=2))
        return 0

    sym = SETTINGS.currency_symbol
    print(s.badge.display)
    print(f"Current total SIP:  {format_currency(s.total_current_contribution, sym)}")
    print(f"Required total SIP: {format_currency(s.total_required_contribution, sym)}")
    print(f"Average coverage:   {format_pct(s.average_coverage)}")
    print(s.conflict.message)
    for a in s.allocation or []:
        print(f"- {a.name}: {format_currency(a.suggested_contribution, sym)}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    pf = load_portfolio(_store(args))
    if args.calculate:
        pf = calculate_all(pf)
    text = export_csv(pf)
    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
    else:
        print(text, end="")
    return 0


def cmd_explain(args: argparse.Namespace) -> int:
    pf = calculate_all(load_portfolio(_store(args)))
    goal = find_goal(pf, args.goal_id)
    if goal is None or goal.results is None:
        print(f"No goal with id {args.goal_id}")
        return 2

    sym = SETTINGS.currency_symbol
    income = float(to_decimal(pf.monthly_income))
    print(advisor_summary(goal, pf.risk_profile, currency_symbol=sym))
    print()
    print(explain_plan(goal.inputs, goal.results, pf.risk_profile, income or None, currency_symbol=sym))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="goal-planner", description="Goal-based savings planner")
    p.add_argument("--log_level", default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser("project", help="Project a single goal from flags")
    pr.add_argument("--name", default="")
    pr.add_argument("--target", default="0")
    pr.add_argument("--years", default="0")
    pr.add_argument("--savings", default="0")
    pr.add_argument("--sip", default="0")
    pr.add_argument("--return", dest="annual_return", default="0", help="Expected annual return, percent")
    pr.add_argument("--inflation", default="0", help="Expected annual inflation, percent")
    pr.add_argument("--scenarios", action="store_true")
    pr.add_argument("--json", action="store_true")
    pr.set_defaults(func=cmd_project)

    for name, func, help_txt in (
        ("summary", cmd_summary, "Aggregate view of the stored portfolio"),
        ("export", cmd_export, "Export the stored portfolio as CSV"),
        ("explain", cmd_explain, "Advisory summary and commentary for one goal"),
    ):
        sp = sub.add_parser(name, help=help_txt)
        sp.add_argument("--state", default=None, help="Path of the planner state JSON file")
        sp.add_argument("--key", default=None)
        sp.set_defaults(func=func)
        if name == "summary":
            sp.add_argument("--json", action="store_true")
        if name == "export":
            sp.add_argument("--out", default=None)
            sp.add_argument("--calculate", action="store_true", help="Recalculate every goal before exporting")
        if name == "explain":
            sp.add_argument("--goal_id", type=int, default=None)

    return p


def main(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or SETTINGS.log_level)
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
