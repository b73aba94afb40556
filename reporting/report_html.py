"""HTML reporting helpers for debug sessions."""

from __future__ import annotations

from html import escape
from typing import Sequence

from formlogic.debugger.conditions import as_text
from formlogic.debugger.fields import field_label
from formlogic.debugger.schemas import DebugSession, FieldElement, RuleStatus

STATUS_GLYPHS = {
    RuleStatus.FIRED: "✓",
    RuleStatus.SKIPPED: "✗",
    RuleStatus.BREAKPOINT: "⏸",
    RuleStatus.ERROR: "⚠",
    RuleStatus.PENDING: "○",
}


def format_trace(session: DebugSession) -> list[str]:
    """Trace entries with a status glyph, e.g. ``Show consent(✓)``."""

    return [f"{item.rule_name}({STATUS_GLYPHS[item.status]})" for item in session.evaluations]


def _state_label(state: dict[str, bool], field_id: str, yes: str, no: str) -> str:
    if field_id not in state:
        return "-"
    return yes if state[field_id] else no


def render_debug_session_report(
    title: str,
    session: DebugSession,
    elements: Sequence[FieldElement] | None = None,
    case_label: str | None = None,
) -> str:
    """Render trace, watch table, conflicts and coverage for one session."""

    elements = elements or []
    snapshot = session.snapshot

    trace_items = "".join(f"<li>{escape(entry)}</li>" for entry in format_trace(session))

    field_ids = sorted(
        set(snapshot.field_values)
        | set(snapshot.visibility)
        | set(snapshot.required_state)
        | set(snapshot.enabled_state)
    )
    watch_rows = "".join(
        (
            f"<tr><td>{escape(field_label(elements, field_id))}</td>"
            f"<td>{escape(as_text(snapshot.field_values.get(field_id)))}</td>"
            f"<td>{_state_label(snapshot.visibility, field_id, 'visible', 'hidden')}</td>"
            f"<td>{_state_label(snapshot.required_state, field_id, 'required', 'optional')}</td>"
            f"<td>{_state_label(snapshot.enabled_state, field_id, 'enabled', 'disabled')}</td></tr>"
        )
        for field_id in field_ids
    )

    if session.conflicts:
        conflict_items = "".join(f"<li class=\"warn\">{escape(item.description)}</li>" for item in session.conflicts)
    else:
        conflict_items = "<li class=\"ok\">No conflicts detected.</li>"

    errors = "".join(
        f"<li>{escape(item.rule_name)}: {escape(item.error)}</li>" for item in session.evaluations if item.error
    )

    coverage = session.coverage
    paused = (
        f"<p><strong>Paused at rule index:</strong> {session.paused_at_index}</p>"
        if session.paused_at_index is not None
        else ""
    )
    case_line = f"<p><strong>Input:</strong> {escape(case_label)}</p>" if case_label else ""

    html = f"""
    <html>
      <head>
        <meta charset=\"utf-8\">
        <title>Logic Debugger Report</title>
        <style>
          body {{ font-family: Arial, sans-serif; margin: 1.2rem; }}
          table {{ border-collapse: collapse; width: 100%; }}
          td, th {{ border: 1px solid #ccc; padding: 0.4rem; text-align: left; }}
          .ok {{ color: #0b7a0b; }}
          .warn {{ color: #b15d00; }}
        </style>
      </head>
      <body>
        <h1>Logic Debugger Report</h1>
        <p><strong>Rule set:</strong> {escape(title)}</p>
        {case_line}
        {paused}

        <h2>Execution Trace</h2>
        <ol>{trace_items}</ol>

        <h2>Field State</h2>
        <table>
          <thead><tr><th>Field</th><th>Value</th><th>Visibility</th><th>Required</th><th>Enabled</th></tr></thead>
          <tbody>{watch_rows}</tbody>
        </table>

        <h2>Conflicts</h2>
        <ul>{conflict_items}</ul>

        <h2>Rule Errors</h2>
        <ul>{errors or '<li class="ok">None.</li>'}</ul>

        <h2>Rule Coverage</h2>
        <p class=\"{'ok' if coverage.percentage >= 100 else 'warn'}\">{coverage.fired}/{coverage.total} rules fired ({coverage.percentage}%)</p>
      </body>
    </html>
    """
    return html.strip()
