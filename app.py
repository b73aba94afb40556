"""Streamlit panel for stepping through form logic rules."""

from __future__ import annotations

import json
from typing import Any

import streamlit as st
from dotenv import load_dotenv

from formlogic.debugger.controls import (
    DebuggerState,
    apply_edge_case,
    continue_execution,
    reset,
    set_test_value,
    start_run,
    step_over,
    toggle_breakpoint,
)
from formlogic.debugger.edge_cases import generate_edge_cases, generate_preset_cases
from formlogic.debugger.fields import collect_referenced_fields, field_label
from formlogic.debugger.schemas import FieldElement, Rule
from formlogic.debugger.validation import validate_rules
from reporting.report_html import STATUS_GLYPHS, format_trace

load_dotenv()


def _sample_rules() -> list[Rule]:
    return [
        Rule.model_validate(
            {
                "id": "adult_consent",
                "name": "Show consent for adults",
                "conditions": [{"fieldId": "age", "operator": "greaterThan", "value": "18"}],
                "actions": [{"type": "show", "targetId": "consent"}, {"type": "require", "targetId": "consent"}],
            }
        ),
        Rule.model_validate(
            {
                "id": "minor_guardian",
                "name": "Guardian email for minors",
                "conditions": [{"fieldId": "age", "operator": "lessThan", "value": "18"}],
                "actions": [{"type": "show", "targetId": "guardian_email"}, {"type": "hide", "targetId": "consent"}],
            }
        ),
        Rule.model_validate(
            {
                "id": "company_tier",
                "name": "Business tier for companies",
                "conditions": [{"fieldId": "company", "operator": "isNotEmpty"}],
                "actions": [{"type": "setValue", "targetId": "tier", "value": "business"}],
            }
        ),
    ]


def _load_uploaded(raw: bytes) -> tuple[list[Rule], list[FieldElement]]:
    payload: Any = json.loads(raw.decode("utf-8"))
    if isinstance(payload, list):
        payload = {"rules": payload}
    rules = [Rule.model_validate(item) for item in payload.get("rules", [])]
    elements = [FieldElement.model_validate(item) for item in payload.get("elements") or []]
    validate_rules(rules)
    return rules, elements


def _state() -> DebuggerState:
    return st.session_state["debugger"]


def _update(state: DebuggerState) -> None:
    st.session_state["debugger"] = state


def _render_rule_list(state: DebuggerState) -> None:
    statuses = {item.rule_id: item.status for item in state.evaluations}
    for idx, rule in enumerate(state.rules):
        c1, c2 = st.columns([1, 9])
        with c1:
            checked = st.checkbox("bp", value=rule.id in state.breakpoints, key=f"bp_{rule.id}", label_visibility="collapsed")
            if checked != (rule.id in state.breakpoints):
                _update(toggle_breakpoint(_state(), rule.id))
        with c2:
            arrow = "➜ " if state.step_index == idx else ""
            glyph = STATUS_GLYPHS[statuses[rule.id]] if rule.id in statuses else "○"
            suffix = "" if rule.enabled else " (disabled)"
            st.write(f"{arrow}{glyph} {rule.name}{suffix}")


def _render_session(state: DebuggerState, elements: list[FieldElement]) -> None:
    session = state.session
    if session is None:
        st.info("Click Run to start debugging. Tick the box next to a rule to set a breakpoint.")
        return

    watch_tab, trace_tab, conflicts_tab, coverage_tab = st.tabs(["Watch", "Trace", "Conflicts", "Coverage"])
    snapshot = session.snapshot
    with watch_tab:
        field_ids = sorted(set(snapshot.field_values) | set(snapshot.visibility) | set(snapshot.required_state) | set(snapshot.enabled_state))
        st.table(
            [
                {
                    "field": field_label(elements, field_id),
                    "value": snapshot.field_values.get(field_id, ""),
                    "visible": snapshot.visibility.get(field_id, "-"),
                    "required": snapshot.required_state.get(field_id, "-"),
                    "enabled": snapshot.enabled_state.get(field_id, "-"),
                }
                for field_id in field_ids
            ]
        )
    with trace_tab:
        st.write(" → ".join(format_trace(session)) or "No rules evaluated.")
        for evaluation in session.evaluations:
            with st.expander(f"{evaluation.rule_name} ({evaluation.status.value})", expanded=False):
                st.json(evaluation.to_wire())
    with conflicts_tab:
        if not session.conflicts:
            st.success("No conflicts detected.")
        for conflict in session.conflicts:
            st.warning(conflict.description)
    with coverage_tab:
        coverage = session.coverage
        st.progress(coverage.percentage / 100)
        st.write(f"{coverage.fired}/{coverage.total} rules fired ({coverage.percentage}%)")


def _render_debugger() -> None:
    uploaded = st.file_uploader("Rule set (JSON)", type=["json"])
    elements: list[FieldElement] = []
    if uploaded is not None:
        try:
            rules, elements = _load_uploaded(uploaded.getvalue())
        except ValueError as exc:
            st.error(f"Could not load rule set: {exc}")
            return
    else:
        st.caption("Using the built-in sample rule set.")
        rules = _sample_rules()

    if "debugger" not in st.session_state or _state().rules != tuple(rules):
        _update(DebuggerState.for_rules(rules))

    st.subheader("Test values")
    state = _state()
    for field_id in collect_referenced_fields(rules):
        value = st.text_input(field_label(elements, field_id), value=str(state.values.get(field_id, "")), key=f"value_{field_id}")
        if value != state.values.get(field_id, ""):
            _update(set_test_value(_state(), field_id, value))

    with st.expander("Edge cases", expanded=False):
        for idx, case in enumerate(generate_preset_cases(rules) + generate_edge_cases(rules, elements)):
            if st.button(case.label, key=f"case_{idx}", help=case.description):
                _update(apply_edge_case(_state(), case))
                for key in [key for key in st.session_state if str(key).startswith("value_")]:
                    del st.session_state[key]
                st.rerun()

    b1, b2, b3, b4 = st.columns(4)
    if b1.button("Run"):
        _update(start_run(_state()))
    if b2.button("Step", disabled=not _state().paused):
        _update(step_over(_state()))
    if b3.button("Continue", disabled=not _state().paused):
        _update(continue_execution(_state()))
    if b4.button("Reset"):
        _update(reset(_state()))

    st.subheader("Rules")
    _render_rule_list(_state())
    _render_session(_state(), elements)


st.set_page_config(page_title="Form Logic Debugger", layout="wide")
st.title("Form Logic Debugger")
st.caption("Evaluates rules against hypothetical values only; nothing is saved.")
_render_debugger()
