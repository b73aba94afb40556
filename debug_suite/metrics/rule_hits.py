"""Aggregate rule metrics across the sessions of an edge-case sweep."""

from __future__ import annotations

from typing import Sequence

from formlogic.debugger.coverage import rounded_percentage
from formlogic.debugger.schemas import DebugSession, Rule, RuleStatus


def compute_rule_hit_counts(rules: Sequence[Rule], sessions: Sequence[DebugSession]) -> dict[str, int]:
    """Count, per enabled rule, the sessions in which it fired."""

    counts = {rule.id: 0 for rule in rules if rule.enabled}
    for session in sessions:
        for evaluation in session.evaluations:
            if evaluation.status == RuleStatus.FIRED and evaluation.rule_id in counts:
                counts[evaluation.rule_id] += 1
    return counts


def find_dead_rules(rules: Sequence[Rule], sessions: Sequence[DebugSession]) -> list[str]:
    """Ids of enabled rules that fired in none of the sessions, in rule order."""

    counts = compute_rule_hit_counts(rules, sessions)
    return [rule_id for rule_id, count in counts.items() if count == 0]


def combined_coverage(rules: Sequence[Rule], sessions: Sequence[DebugSession]) -> dict[str, float | int]:
    """Share of enabled rules fired by at least one session."""

    counts = compute_rule_hit_counts(rules, sessions)
    total = len(counts)
    fired = sum(1 for count in counts.values() if count)
    return {
        "fired": fired,
        "total": total,
        "percentage": rounded_percentage(fired, total),
    }
