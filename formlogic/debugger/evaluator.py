"""Single-rule evaluation step.

One call takes a rule and the working snapshot of the pass and returns the
evaluation record together with the snapshot the next rule must see. Faults are
contained here so the session runner never has to handle them.
"""

from __future__ import annotations

import logging

from .actions import apply_action
from .conditions import evaluate_condition
from .schemas import (
    Action,
    ConditionResult,
    FieldStateSnapshot,
    LogicOperator,
    Rule,
    RuleEvaluation,
    RuleStatus,
)

logger = logging.getLogger(__name__)


def paused_evaluation(rule: Rule) -> RuleEvaluation:
    """Record for a rule halted on a breakpoint, before any condition is read."""

    return RuleEvaluation(rule_id=rule.id, rule_name=rule.name, status=RuleStatus.BREAKPOINT)


def _conditions_met(rule: Rule, results: list[ConditionResult]) -> bool:
    if not results:
        return True
    if rule.condition_operator == LogicOperator.OR:
        return any(result.passed for result in results)
    return all(result.passed for result in results)


def evaluate_rule(rule: Rule, snapshot: FieldStateSnapshot) -> tuple[RuleEvaluation, FieldStateSnapshot]:
    """Evaluate ``rule`` against ``snapshot`` and apply its actions when it fires.

    On any fault the rule is recorded as ``error`` and the incoming snapshot is
    returned unchanged.
    """

    try:
        results = [evaluate_condition(condition, snapshot.field_values) for condition in rule.conditions]
        met = _conditions_met(rule, results)
        anomalies = [result.anomaly for result in results if result.anomaly]

        updated = snapshot
        executed: list[Action] = []
        if met:
            for action in rule.actions:
                updated = apply_action(action, updated)
                executed.append(action)
    except Exception as exc:
        logger.warning("Rule %s (%s) failed: %s", rule.id, rule.name, exc)
        return (
            RuleEvaluation(
                rule_id=rule.id,
                rule_name=rule.name,
                status=RuleStatus.ERROR,
                error=str(exc),
            ),
            snapshot,
        )

    evaluation = RuleEvaluation(
        rule_id=rule.id,
        rule_name=rule.name,
        status=RuleStatus.FIRED if met else RuleStatus.SKIPPED,
        conditions_met=met,
        condition_results=results,
        executed_actions=executed,
        error="; ".join(anomalies) or None,
    )
    return evaluation, updated
