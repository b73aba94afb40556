"""Session runner: one ordered, breakpoint-aware pass over a rule list."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from .conflicts import detect_conflicts
from .coverage import compute_coverage
from .evaluator import evaluate_rule, paused_evaluation
from .schemas import DebugSession, FieldStateSnapshot, FieldValue, Rule, RuleEvaluation

logger = logging.getLogger(__name__)


def initial_snapshot(values: Mapping[str, FieldValue] | None) -> FieldStateSnapshot:
    """Working state at the start of a pass: the test values and nothing else."""

    return FieldStateSnapshot(field_values=dict(values or {}))


def _replay_prefix(rules: Sequence[Rule], snapshot: FieldStateSnapshot) -> FieldStateSnapshot:
    # Rebuilds the working state a resumed pass would have had; nothing is recorded.
    for rule in rules:
        if rule.enabled:
            _, snapshot = evaluate_rule(rule, snapshot)
    return snapshot


def run_debug_session(
    rules: Sequence[Rule],
    values: Mapping[str, FieldValue] | None,
    breakpoints: Iterable[str] = (),
    start_index: int = 0,
    stop_index: int | None = None,
) -> DebugSession:
    """Evaluate ``rules`` in order against ``values`` and return the full session.

    Evaluation is recorded from ``start_index`` on; enabled rules before it are
    replayed silently so that values written by earlier ``setValue`` actions are
    still seen. The pass halts on the first enabled rule whose id is in
    ``breakpoints`` (before reading its conditions), or after the rule at
    ``stop_index`` when one is given. An out-of-range ``start_index`` yields an
    empty session.
    """

    rules = list(rules)
    breakpoints = frozenset(breakpoints)
    snapshot = initial_snapshot(values)

    if start_index < 0 or start_index >= len(rules):
        logger.debug("Nothing to run: start_index=%s rule_count=%s", start_index, len(rules))
        return DebugSession(snapshot=snapshot)

    snapshot = _replay_prefix(rules[:start_index], snapshot)

    evaluations: list[RuleEvaluation] = []
    paused_at_index: int | None = None
    next_index: int | None = None

    for index in range(start_index, len(rules)):
        rule = rules[index]
        if not rule.enabled:
            continue

        if stop_index is not None and index > stop_index:
            next_index = index
            break

        if rule.id in breakpoints:
            evaluations.append(paused_evaluation(rule))
            paused_at_index = next_index = index
            logger.debug("Paused on breakpoint at rule %s (index %s)", rule.id, index)
            break

        evaluation, snapshot = evaluate_rule(rule, snapshot)
        evaluations.append(evaluation)

    logger.debug(
        "Pass finished: start_index=%s evaluated=%s next_index=%s",
        start_index,
        len(evaluations),
        next_index,
    )

    return DebugSession(
        evaluations=evaluations,
        snapshot=snapshot,
        trace=[evaluation.rule_name for evaluation in evaluations],
        conflicts=detect_conflicts(evaluations),
        coverage=compute_coverage(evaluations),
        paused_at_index=paused_at_index,
        next_index=next_index,
        stepping=next_index is not None,
    )
