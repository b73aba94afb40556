"""Run / step / continue controls over the stateless session runner.

The debugger panel keeps a ``DebuggerState`` between interactions. Every control
returns a new state; each one issues a fresh ``run_debug_session`` call with an
adjusted start index and breakpoint set and merges the result onto the
evaluations already shown.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from .conditions import as_text
from .conflicts import detect_conflicts
from .coverage import compute_coverage
from .schemas import DebugSession, EdgeCase, FieldValue, Rule, RuleEvaluation, RuleStatus
from .session import run_debug_session


@dataclass(frozen=True)
class DebuggerState:
    """Everything the panel holds between two engine calls."""

    rules: tuple[Rule, ...] = ()
    values: dict[str, FieldValue] = field(default_factory=dict)
    breakpoints: frozenset[str] = frozenset()
    evaluations: tuple[RuleEvaluation, ...] = ()
    session: DebugSession | None = None
    step_index: int | None = None

    @classmethod
    def for_rules(cls, rules: Sequence[Rule], values: dict[str, FieldValue] | None = None) -> "DebuggerState":
        return cls(rules=tuple(rules), values=dict(values or {}))

    @property
    def paused(self) -> bool:
        return self.step_index is not None


def _merge(previous: Sequence[RuleEvaluation], latest: DebugSession) -> DebugSession:
    evaluations = [item for item in previous if item.status != RuleStatus.BREAKPOINT]
    evaluations.extend(latest.evaluations)
    return latest.model_copy(
        update={
            "evaluations": evaluations,
            "trace": [item.rule_name for item in evaluations],
            "conflicts": detect_conflicts(evaluations),
            "coverage": compute_coverage(evaluations),
        }
    )


def start_run(state: DebuggerState) -> DebuggerState:
    """Run from the first rule, halting on the first breakpoint."""

    session = run_debug_session(state.rules, state.values, state.breakpoints)
    return replace(
        state,
        evaluations=tuple(session.evaluations),
        session=session,
        step_index=session.paused_at_index,
    )


def _resume(state: DebuggerState, single_step: bool) -> DebuggerState:
    index = state.step_index
    if index is None:
        return state

    breakpoints = state.breakpoints - {state.rules[index].id}
    latest = run_debug_session(
        state.rules,
        state.values,
        breakpoints,
        start_index=index,
        stop_index=index if single_step else None,
    )
    merged = _merge(state.evaluations, latest)
    return replace(
        state,
        evaluations=tuple(merged.evaluations),
        session=merged,
        step_index=latest.next_index,
    )


def step_over(state: DebuggerState) -> DebuggerState:
    """Evaluate exactly the paused rule and pause on the next enabled one."""

    return _resume(state, single_step=True)


def continue_execution(state: DebuggerState) -> DebuggerState:
    """Resume past the current breakpoint and run to the next one (or the end)."""

    return _resume(state, single_step=False)


def reset(state: DebuggerState) -> DebuggerState:
    return replace(state, evaluations=(), session=None, step_index=None)


def toggle_breakpoint(state: DebuggerState, rule_id: str) -> DebuggerState:
    if rule_id in state.breakpoints:
        return replace(state, breakpoints=state.breakpoints - {rule_id})
    return replace(state, breakpoints=state.breakpoints | {rule_id})


def set_test_value(state: DebuggerState, field_id: str, value: FieldValue) -> DebuggerState:
    return replace(state, values={**state.values, field_id: value})


def apply_edge_case(state: DebuggerState, edge_case: EdgeCase) -> DebuggerState:
    """Load an edge case as the new test values, stringified like form inputs."""

    return replace(state, values={key: as_text(value) for key, value in edge_case.values.items()})
