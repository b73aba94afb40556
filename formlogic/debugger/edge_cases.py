"""Synthesis of test inputs that flip individual condition outcomes.

Generation reads the rule set only; no rule is evaluated here.
"""

from __future__ import annotations

from typing import Sequence

from .conditions import as_number, as_text
from .fields import field_label
from .schemas import ConditionOperator, EdgeCase, FieldElement, Rule

OPERATOR_SYMBOLS = {
    ConditionOperator.EQUALS.value: "=",
    ConditionOperator.NOT_EQUALS.value: "≠",
    ConditionOperator.CONTAINS.value: "⊃",
    ConditionOperator.NOT_CONTAINS.value: "⊅",
    ConditionOperator.GREATER_THAN.value: ">",
    ConditionOperator.LESS_THAN.value: "<",
    ConditionOperator.IS_EMPTY.value: "∅",
    ConditionOperator.IS_NOT_EMPTY.value: "≠∅",
}

NON_EMPTY_PROBE = "test-value"
DIFFERENT_PROBE = "completely_different"

_NUMERIC = {ConditionOperator.GREATER_THAN.value, ConditionOperator.LESS_THAN.value}
_EMPTINESS = {ConditionOperator.IS_EMPTY.value, ConditionOperator.IS_NOT_EMPTY.value}


def _different_from(literal: str) -> str:
    return f"NOT_{literal}" if literal else NON_EMPTY_PROBE


def _probes(operator: str, literal: str) -> list[str]:
    if operator in _EMPTINESS:
        return ["", NON_EMPTY_PROBE]
    if operator in _NUMERIC:
        boundary = as_number(literal)
        if boundary is None:
            return [literal, ""]
        return [as_text(boundary - 1), literal, as_text(boundary + 1)]
    if operator in {ConditionOperator.EQUALS.value, ConditionOperator.NOT_EQUALS.value}:
        return [literal, _different_from(literal)]
    if operator in {ConditionOperator.CONTAINS.value, ConditionOperator.NOT_CONTAINS.value}:
        return [literal, DIFFERENT_PROBE]
    return []


def generate_edge_cases(
    rules: Sequence[Rule],
    elements: Sequence[FieldElement] | None = None,
) -> list[EdgeCase]:
    """One edge case per distinct (field id, operator, value) across all conditions.

    ``values`` holds the probe most likely to expose a logic bug (the literal for
    equality and substring checks, the exact boundary for numeric checks, the
    empty string for emptiness checks). ``probes`` lists every value worth trying.
    Conditions with an unknown operator produce no case.
    """

    cases: list[EdgeCase] = []
    seen: set[tuple[str, str, str]] = set()

    for rule in rules:
        for condition in rule.conditions:
            operator = str(condition.operator)
            literal = as_text(condition.value)
            signature = (condition.field_id, operator, literal)
            if signature in seen or operator not in OPERATOR_SYMBOLS:
                continue
            seen.add(signature)

            probes = _probes(operator, literal)
            primary = "" if operator in _EMPTINESS else literal
            label = field_label(elements or [], condition.field_id)
            symbol = OPERATOR_SYMBOLS[operator]
            title = f"{label} {symbol}" if operator in _EMPTINESS else f"{label} {symbol} {literal}"

            cases.append(
                EdgeCase(
                    label=title,
                    description=(
                        f"Flips '{rule.name}' on {label}: try "
                        + ", ".join(repr(probe) for probe in probes)
                    ),
                    values={condition.field_id: primary},
                    probes=probes,
                )
            )

    return cases


def _referenced_condition_fields(rules: Sequence[Rule]) -> list[str]:
    ids: list[str] = []
    for rule in rules:
        candidates = [rule.trigger_field_id] + [condition.field_id for condition in rule.conditions]
        for field_id in candidates:
            if field_id and field_id not in ids:
                ids.append(field_id)
    return ids


def _numeric_offset(value: str, offset: int) -> str | None:
    number = as_number(value)
    return None if number is None else as_text(number + offset)


def generate_preset_cases(rules: Sequence[Rule]) -> list[EdgeCase]:
    """Aggregate inputs over the whole rule set: empty, happy path, inverted, boundaries, all-fire."""

    conditions = [condition for rule in rules for condition in rule.conditions]
    cases = [
        EdgeCase(
            label="All Empty",
            description="Every referenced field is empty; exercises isEmpty/isNotEmpty guards",
            values={field_id: "" for field_id in _referenced_condition_fields(rules)},
        )
    ]

    happy: dict[str, str] = {}
    inverted: dict[str, str] = {}
    boundary: dict[str, str] = {}
    contradictory: dict[str, str] = {}
    for condition in conditions:
        field_id = condition.field_id
        operator = str(condition.operator)
        literal = as_text(condition.value)

        if operator in {ConditionOperator.EQUALS.value, ConditionOperator.CONTAINS.value}:
            happy[field_id] = literal
        elif operator == ConditionOperator.IS_NOT_EMPTY.value:
            happy[field_id] = NON_EMPTY_PROBE
        elif operator in _NUMERIC:
            step = 1 if operator == ConditionOperator.GREATER_THAN.value else -1
            shifted = _numeric_offset(literal, step)
            if shifted is not None:
                happy[field_id] = shifted

        if operator == ConditionOperator.EQUALS.value:
            inverted[field_id] = _different_from(literal)
        elif operator == ConditionOperator.NOT_EQUALS.value:
            inverted[field_id] = literal
        elif operator == ConditionOperator.CONTAINS.value:
            inverted[field_id] = DIFFERENT_PROBE
        elif operator == ConditionOperator.IS_EMPTY.value:
            inverted[field_id] = NON_EMPTY_PROBE
        elif operator == ConditionOperator.IS_NOT_EMPTY.value:
            inverted[field_id] = ""
        elif operator in _NUMERIC:
            step = -1 if operator == ConditionOperator.GREATER_THAN.value else 1
            shifted = _numeric_offset(literal, step)
            if shifted is not None:
                inverted[field_id] = shifted

        if operator in _NUMERIC:
            boundary[field_id] = literal

        if operator == ConditionOperator.EQUALS.value:
            contradictory[field_id] = literal
        elif operator == ConditionOperator.IS_NOT_EMPTY.value:
            contradictory[field_id] = contradictory.get(field_id) or "test"
        elif operator in _NUMERIC:
            greater = operator == ConditionOperator.GREATER_THAN.value
            target = as_number(literal)
            if target is None:
                continue
            target = target + 1 if greater else target - 1
            existing = as_number(contradictory.get(field_id))
            if existing is not None:
                target = max(existing, target) if greater else min(existing, target)
            contradictory[field_id] = as_text(target)

    cases.append(
        EdgeCase(label="Happy Path", description="Values chosen to satisfy as many conditions as possible", values=happy)
    )
    cases.append(
        EdgeCase(label="Inverted", description="Values chosen to fail as many conditions as possible", values=inverted)
    )
    if boundary:
        cases.append(
            EdgeCase(
                label="Boundary Values",
                description="Numeric fields set to their exact boundary values",
                values={**happy, **boundary},
            )
        )
    if len(rules) >= 2:
        cases.append(
            EdgeCase(
                label="Contradictory",
                description="Attempts to fire every rule at once to expose conflicts",
                values=contradictory,
            )
        )
    return cases
