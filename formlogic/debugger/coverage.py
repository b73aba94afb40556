"""Rule coverage for one evaluation list."""

from __future__ import annotations

from typing import Sequence

from .schemas import Coverage, RuleEvaluation, RuleStatus


def rounded_percentage(fired: int, total: int) -> int:
    """Whole-number percentage, halves rounded up (1 of 8 is 13)."""

    if not total:
        return 0
    return (fired * 200 + total) // (total * 2)


def compute_coverage(evaluations: Sequence[RuleEvaluation]) -> Coverage:
    """Share of evaluated rules that fired.

    A rule paused on a breakpoint has not been evaluated yet and is not counted.
    """

    considered = [item for item in evaluations if item.status != RuleStatus.BREAKPOINT]
    total = len(considered)
    fired = sum(1 for item in considered if item.status == RuleStatus.FIRED)
    percentage = rounded_percentage(fired, total)
    return Coverage(fired=fired, total=total, percentage=percentage)
