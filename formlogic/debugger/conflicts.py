"""Detection of fired rules that write opposing effects to the same field."""

from __future__ import annotations

from typing import Sequence

from .schemas import ActionType, RuleConflict, RuleEvaluation, RuleRef, RuleStatus

# (positive, negative) action pairs; require has no counterpart and is not checked.
OPPOSING_ACTIONS: tuple[tuple[str, str], ...] = (
    (ActionType.SHOW.value, ActionType.HIDE.value),
    (ActionType.ENABLE.value, ActionType.DISABLE.value),
)


def _writes(evaluation: RuleEvaluation) -> set[tuple[str, str]]:
    return {(str(action.target_id), str(action.type)) for action in evaluation.executed_actions}


def detect_conflicts(evaluations: Sequence[RuleEvaluation]) -> list[RuleConflict]:
    """Return one conflict per pair of fired rules that disagree on a target.

    Pairs are ordered by evaluation order (rule A was evaluated first) and each
    (A, B, target, action pair) is reported once.
    """

    fired = [item for item in evaluations if item.status == RuleStatus.FIRED]
    writes = [_writes(item) for item in fired]

    conflicts: list[RuleConflict] = []
    seen: set[tuple[str, str, str, str]] = set()
    for i, first in enumerate(fired):
        for j in range(i + 1, len(fired)):
            second = fired[j]
            if second.rule_id == first.rule_id:
                continue
            for target_id, type_a in sorted(writes[i]):
                for positive, negative in OPPOSING_ACTIONS:
                    if type_a == positive:
                        type_b = negative
                    elif type_a == negative:
                        type_b = positive
                    else:
                        continue
                    if (target_id, type_b) not in writes[j]:
                        continue
                    key = (first.rule_id, second.rule_id, target_id, positive)
                    if key in seen:
                        continue
                    seen.add(key)
                    conflicts.append(
                        RuleConflict(
                            target_id=target_id,
                            description=(
                                f'"{first.rule_name}" ({type_a}) vs "{second.rule_name}" ({type_b}) '
                                f'on target "{target_id}"'
                            ),
                            rule_a=RuleRef(id=first.rule_id, name=first.rule_name),
                            rule_b=RuleRef(id=second.rule_id, name=second.rule_name),
                        )
                    )
    return conflicts
