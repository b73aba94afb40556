from formlogic.debugger.schemas import Rule, RuleStatus
from formlogic.debugger.session import run_debug_session


def _rule(rule_id, conditions=(), actions=(), enabled=True):
    return Rule.model_validate(
        {
            "id": rule_id,
            "name": f"Rule {rule_id}",
            "enabled": enabled,
            "conditions": list(conditions),
            "actions": list(actions),
        }
    )


AGE_RULE = _rule(
    "r1",
    [{"fieldId": "age", "operator": "greater-than", "value": "18"}],
    [{"type": "show", "targetId": "consent"}],
)


def test_adult_fires_and_shows_consent():
    session = run_debug_session([AGE_RULE], {"age": "20"}, set())

    assert len(session.evaluations) == 1
    evaluation = session.evaluations[0]
    assert evaluation.rule_id == "r1"
    assert evaluation.status == RuleStatus.FIRED
    assert [(r.passed, r.actual_value) for r in evaluation.condition_results] == [(True, "20")]
    assert session.snapshot.visibility == {"consent": True}
    assert session.coverage.model_dump() == {"fired": 1, "total": 1, "percentage": 100}
    assert session.paused_at_index is None



def test_hyphenated_rule_document_fires_like_camel_case():
    rule = _rule(
        "r1",
        [{"fieldId": "age", "operator": "greater-than", "value": "18"}],
        [{"type": "show", "targetId": "consent"}, {"type": "set-value", "targetId": "tier", "value": "adult"}],
    )

    session = run_debug_session([rule], {"age": "20"}, set())

    assert rule.conditions[0].operator == "greaterThan"
    assert session.evaluations[0].status == RuleStatus.FIRED
    assert session.evaluations[0].error is None
    assert session.snapshot.visibility == {"consent": True}
    assert session.snapshot.set_values == {"tier": "adult"}
    assert session.trace == ["Rule r1"]


def test_minor_skips_and_leaves_visibility_empty():
    session = run_debug_session([AGE_RULE], {"age": "15"}, set())
    assert session.evaluations[0].status == RuleStatus.SKIPPED
    assert session.snapshot.visibility == {}
    assert session.coverage.percentage == 0


def test_disabled_rules_are_absent():
    rules = [_rule("r1"), _rule("r2", enabled=False), _rule("r3")]
    session = run_debug_session(rules, {}, set())
    assert [item.rule_id for item in session.evaluations] == ["r1", "r3"]
    assert session.trace == ["Rule r1", "Rule r3"]


def test_breakpoint_pauses_before_rule_and_resume_continues():
    rules = [_rule("r1"), _rule("r2", actions=[{"type": "hide", "targetId": "x"}]), _rule("r3")]

    first = run_debug_session(rules, {}, {"r2"})
    assert first.paused_at_index == 1
    assert [(item.rule_id, item.status) for item in first.evaluations] == [
        ("r1", RuleStatus.FIRED),
        ("r2", RuleStatus.BREAKPOINT),
    ]
    assert first.evaluations[1].condition_results == []
    assert first.snapshot.visibility == {}
    assert first.coverage.total == 1

    second = run_debug_session(rules, {}, set(), start_index=1)
    assert [item.rule_id for item in second.evaluations] == ["r2", "r3"]
    assert second.paused_at_index is None
    assert second.snapshot.visibility == {"x": False}


def test_set_value_is_seen_by_later_rules():
    rules = [
        _rule("r1", actions=[{"type": "setValue", "targetId": "tier", "value": "gold"}]),
        _rule("r2", [{"fieldId": "tier", "operator": "equals", "value": "gold"}], [{"type": "show", "targetId": "perks"}]),
    ]
    session = run_debug_session(rules, {"tier": "basic"}, set())

    assert [item.status for item in session.evaluations] == [RuleStatus.FIRED, RuleStatus.FIRED]
    assert session.snapshot.field_values == {"tier": "gold"}
    assert session.snapshot.visibility == {"perks": True}


def test_step_equivalence_with_chained_set_value():
    rules = [
        _rule("r1", actions=[{"type": "setValue", "targetId": "b", "value": "1"}]),
        _rule("r2", enabled=False),
        _rule("r3", [{"fieldId": "b", "operator": "equals", "value": "1"}], [{"type": "show", "targetId": "x"}]),
        _rule("r4", [{"fieldId": "a", "operator": "isEmpty"}], [{"type": "hide", "targetId": "x"}]),
        _rule("r5", [{"fieldId": "a", "operator": "lessThan", "value": "0"}]),
    ]
    values = {"a": ""}
    full = run_debug_session(rules, values, set())

    stepped = []
    for index in range(len(rules)):
        stepped.extend(run_debug_session(rules, values, set(), start_index=index, stop_index=index).evaluations)

    assert stepped == full.evaluations


def test_stop_index_reports_next_enabled_rule():
    rules = [_rule("r1"), _rule("r2", enabled=False), _rule("r3")]
    session = run_debug_session(rules, {}, set(), stop_index=0)

    assert [item.rule_id for item in session.evaluations] == ["r1"]
    assert session.paused_at_index is None
    assert session.next_index == 2
    assert session.stepping is True


def test_out_of_range_start_index_returns_empty_session():
    for start in (3, 99, -1):
        session = run_debug_session([_rule("r1"), _rule("r2"), _rule("r3")], {"a": "1"}, set(), start_index=start)
        assert session.evaluations == []
        assert session.paused_at_index is None
        assert session.coverage.percentage == 0


def test_error_rule_does_not_stop_the_pass():
    rules = [
        _rule("r1", actions=[{"type": "show", "targetId": "x"}]),
        _rule("r2", actions=[{"type": "hide", "targetId": "x"}, {"type": "teleport", "targetId": "y"}]),
        _rule("r3", actions=[{"type": "require", "targetId": "z"}]),
    ]
    session = run_debug_session(rules, {}, set())

    assert [item.status for item in session.evaluations] == [RuleStatus.FIRED, RuleStatus.ERROR, RuleStatus.FIRED]
    assert session.snapshot.visibility == {"x": True}
    assert session.snapshot.required_state == {"z": True}
    assert session.coverage.model_dump() == {"fired": 2, "total": 3, "percentage": 67}


def test_input_values_are_not_mutated():
    values = {"tier": "basic"}
    rules = [_rule("r1", actions=[{"type": "setValue", "targetId": "tier", "value": "gold"}])]
    run_debug_session(rules, values, set())
    assert values == {"tier": "basic"}


def test_wire_format_uses_camel_case():
    wire = run_debug_session([AGE_RULE], {"age": "20"}, set()).to_wire()
    assert wire["pausedAtIndex"] is None
    assert wire["snapshot"]["visibility"] == {"consent": True}
    assert wire["evaluations"][0]["conditionResults"][0]["actualValue"] == "20"
    assert wire["evaluations"][0]["status"] == "fired"
