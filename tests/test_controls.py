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
from formlogic.debugger.schemas import EdgeCase, Rule, RuleStatus
from formlogic.debugger.session import run_debug_session


def _rules():
    return [
        Rule.model_validate({"id": "r1", "name": "Set plan", "actions": [{"type": "setValue", "targetId": "plan", "value": "pro"}]}),
        Rule.model_validate(
            {
                "id": "r2",
                "name": "Pro billing",
                "conditions": [{"fieldId": "plan", "operator": "equals", "value": "pro"}],
                "actions": [{"type": "show", "targetId": "billing"}],
            }
        ),
        Rule.model_validate({"id": "r3", "name": "Off", "enabled": False}),
        Rule.model_validate({"id": "r4", "name": "Hide billing", "actions": [{"type": "hide", "targetId": "billing"}]}),
    ]


def test_run_pauses_and_continue_finishes():
    state = toggle_breakpoint(DebuggerState.for_rules(_rules()), "r2")
    state = start_run(state)

    assert state.step_index == 1
    assert [item.status for item in state.evaluations] == [RuleStatus.FIRED, RuleStatus.BREAKPOINT]

    state = continue_execution(state)
    assert state.step_index is None
    assert [item.rule_id for item in state.evaluations] == ["r1", "r2", "r4"]
    assert state.session.trace == ["Set plan", "Pro billing", "Hide billing"]
    assert state.session.coverage.model_dump() == {"fired": 3, "total": 3, "percentage": 100}
    assert len(state.session.conflicts) == 1


def test_stepping_matches_a_full_run():
    state = start_run(toggle_breakpoint(DebuggerState.for_rules(_rules()), "r1"))
    assert state.step_index == 0

    state = step_over(state)
    assert state.step_index == 1
    state = step_over(state)
    assert state.step_index == 3
    state = step_over(state)
    assert state.step_index is None

    full = run_debug_session(_rules(), {}, set())
    assert list(state.evaluations) == full.evaluations
    assert state.session.snapshot == full.snapshot


def test_continue_stops_at_next_breakpoint():
    state = DebuggerState.for_rules(_rules())
    state = toggle_breakpoint(toggle_breakpoint(state, "r1"), "r4")
    state = continue_execution(start_run(state))

    assert state.step_index == 3
    assert [item.rule_id for item in state.evaluations] == ["r1", "r2", "r4"]
    assert state.evaluations[-1].status == RuleStatus.BREAKPOINT


def test_controls_without_pause_are_no_ops():
    state = start_run(DebuggerState.for_rules(_rules()))
    assert state.paused is False
    assert step_over(state) is state
    assert continue_execution(state) is state


def test_reset_and_breakpoint_toggle():
    state = start_run(toggle_breakpoint(DebuggerState.for_rules(_rules()), "r2"))
    state = reset(state)
    assert state.session is None
    assert state.evaluations == ()
    assert state.breakpoints == frozenset({"r2"})
    assert toggle_breakpoint(state, "r2").breakpoints == frozenset()


def test_test_values_and_edge_cases():
    state = set_test_value(DebuggerState.for_rules(_rules()), "age", "20")
    assert state.values == {"age": "20"}

    state = apply_edge_case(state, EdgeCase(label="c", description="", values={"n": 19, "flag": None}))
    assert state.values == {"n": "19", "flag": ""}
