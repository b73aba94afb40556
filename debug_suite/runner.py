"""Command-line runner: debug one input or sweep a rule set with generated edge cases."""

from __future__ import annotations

import argparse
import csv
import html
import json
import logging
import re
import time
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from debug_suite.config import RunnerSettings, SweepThresholds, thresholds_from_env
from debug_suite.dataset_loader import RuleSet, load_rule_set, load_values
from debug_suite.metrics.rule_hits import combined_coverage, find_dead_rules
from formlogic.debugger.edge_cases import generate_edge_cases, generate_preset_cases
from formlogic.debugger.schemas import DebugSession, EdgeCase
from formlogic.debugger.session import run_debug_session
from reporting.report_html import render_debug_session_report

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = [
    "case",
    "fired",
    "total",
    "percentage",
    "conflicts",
    "errors",
    "execution_time_ms",
]


def _slug(name: str) -> str:
    return re.sub(r"[^\w.-]+", "_", name).strip("_") or "rule_set"


def sweep_cases(rule_set: RuleSet) -> list[EdgeCase]:
    """Inputs for a sweep: saved values first, then presets, then per-condition cases."""

    cases: list[EdgeCase] = []
    if rule_set.values:
        cases.append(EdgeCase(label="Saved Values", description="Test values stored with the rule set", values=rule_set.values))
    cases.extend(generate_preset_cases(rule_set.rules))
    cases.extend(generate_edge_cases(rule_set.rules, rule_set.elements))
    return cases


def run_case(rule_set: RuleSet, case: EdgeCase) -> tuple[DebugSession, dict]:
    start = time.perf_counter()
    # Edge cases only set the probed field; other saved values stay in place.
    session = run_debug_session(rule_set.rules, {**rule_set.values, **case.values})
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    row = {
        "case": case.label,
        "fired": session.coverage.fired,
        "total": session.coverage.total,
        "percentage": session.coverage.percentage,
        "conflicts": len(session.conflicts),
        "errors": sum(1 for item in session.evaluations if item.error),
        "execution_time_ms": elapsed_ms,
    }
    return session, row


def _write_csv(output_path: Path, rows: list[dict]) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=SUMMARY_FIELDS)
        writer.writeheader()
        writer.writerows(rows)


def _write_sweep_report(output_path: Path, rule_set: RuleSet, rows: list[dict], dead_rules: list[str], coverage: dict) -> None:
    table_rows = "\n".join(
        (
            f"<tr><td>{html.escape(str(row['case']))}</td>"
            f"<td>{row['fired']}/{row['total']}</td>"
            f"<td>{row['percentage']}%</td>"
            f"<td>{row['conflicts']}</td>"
            f"<td>{row['errors']}</td>"
            f"<td>{row['execution_time_ms']}</td></tr>"
        )
        for row in rows
    )
    dead = ", ".join(html.escape(rule_id) for rule_id in dead_rules) or "none"

    output_path.write_text(
        """<!doctype html>
<html>
<head><meta charset=\"utf-8\"><title>Edge-Case Sweep Report</title></head>
<body>
<h1>Edge-Case Sweep Report: {name}</h1>
<p>Combined coverage: {fired}/{total} rules fired in at least one case ({percentage}%)</p>
<p>Rules never fired: {dead}</p>
<table border=\"1\" cellpadding=\"6\" cellspacing=\"0\">
<thead><tr><th>Case</th><th>Fired</th><th>Coverage</th><th>Conflicts</th><th>Errors</th><th>Execution Time (ms)</th></tr></thead>
<tbody>
{rows}
</tbody>
</table>
</body>
</html>
""".format(
            name=html.escape(rule_set.name),
            fired=coverage["fired"],
            total=coverage["total"],
            percentage=coverage["percentage"],
            dead=dead,
            rows=table_rows,
        ),
        encoding="utf-8",
    )


def run_sweep(rules_path: str, thresholds: SweepThresholds, settings: RunnerSettings) -> int:
    rule_set = load_rule_set(rules_path)
    cases = sweep_cases(rule_set)

    sessions: list[DebugSession] = []
    rows: list[dict] = []
    for case in cases:
        session, row = run_case(rule_set, case)
        sessions.append(session)
        rows.append(row)
        logger.debug("Case %s: %s%% coverage, %s conflict(s)", case.label, row["percentage"], row["conflicts"])

    coverage = combined_coverage(rule_set.rules, sessions)
    dead_rules = find_dead_rules(rule_set.rules, sessions)

    settings.report_dir.mkdir(parents=True, exist_ok=True)
    html_path = settings.report_dir / f"{_slug(rule_set.name)}_sweep.html"
    _write_csv(settings.summary_csv, rows)
    _write_sweep_report(html_path, rule_set, rows, dead_rules, coverage)

    logger.info(
        "Sweep completed | rule_set=%s cases=%s coverage=%s%% dead_rules=%s",
        rule_set.name,
        len(cases),
        coverage["percentage"],
        len(dead_rules),
    )
    print(json.dumps({"csv": str(settings.summary_csv), "html": str(html_path), "dead_rules": dead_rules}, indent=2))

    if coverage["percentage"] < thresholds.min_coverage_percentage:
        return 1
    if thresholds.fail_on_conflicts and any(row["conflicts"] for row in rows):
        return 1
    return 0


def run_single(
    rules_path: str,
    values_path: str | None,
    breakpoints: list[str],
    start_index: int,
    settings: RunnerSettings,
    write_report: bool,
) -> int:
    rule_set = load_rule_set(rules_path)
    values = load_values(values_path) if values_path else rule_set.values

    session = run_debug_session(rule_set.rules, values, breakpoints, start_index=start_index)
    print(json.dumps(session.to_wire(), indent=2, ensure_ascii=False))

    if write_report:
        settings.report_dir.mkdir(parents=True, exist_ok=True)
        html_path = settings.report_dir / f"{_slug(rule_set.name)}_session.html"
        html_path.write_text(
            render_debug_session_report(rule_set.name, session, rule_set.elements, case_label=values_path),
            encoding="utf-8",
        )
        logger.info("Session report written to %s", html_path)

    return 1 if any(item.error for item in session.evaluations) else 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="logic-debugger")
    parser.add_argument("rules", help="Path to a rule-set JSON file")
    parser.add_argument("--values", dest="values", help="Path to a test-values JSON file")
    parser.add_argument("--breakpoint", dest="breakpoints", action="append", default=[], help="Rule id to pause on")
    parser.add_argument("--start-index", dest="start_index", type=int, default=0, help="Rule index to resume from")
    parser.add_argument("--sweep", action="store_true", help="Run every generated edge case and report coverage")
    parser.add_argument("--min-coverage", dest="min_coverage", type=int, help="Minimum combined coverage for --sweep")
    parser.add_argument("--allow-conflicts", dest="allow_conflicts", action="store_true")
    parser.add_argument("--report", action="store_true", help="Write an HTML report for a single session")
    parser.add_argument("--report-dir", dest="report_dir", help="Directory for HTML reports")
    parser.add_argument("--log-level", dest="log_level", help="Logging level (default from environment or INFO)")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)

    settings = RunnerSettings.from_env()
    if args.report_dir:
        settings = replace(settings, report_dir=Path(args.report_dir))
    logging.basicConfig(level=(args.log_level or settings.log_level).upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.sweep:
        thresholds = thresholds_from_env()
        if args.min_coverage is not None:
            thresholds = replace(thresholds, min_coverage_percentage=args.min_coverage)
        if args.allow_conflicts:
            thresholds = replace(thresholds, fail_on_conflicts=False)
        return run_sweep(args.rules, thresholds, settings)

    return run_single(args.rules, args.values, args.breakpoints, args.start_index, settings, args.report)


if __name__ == "__main__":
    raise SystemExit(main())
