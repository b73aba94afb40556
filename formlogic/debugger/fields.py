"""Field schema helpers: labels for display and the fields a rule set touches."""

from __future__ import annotations

from typing import Sequence

from .schemas import FieldElement, Rule


def field_label(elements: Sequence[FieldElement], field_id: str) -> str:
    """Return the human-readable label of ``field_id``, searching nested elements."""

    for element in elements:
        if element.id == field_id:
            return element.label or field_id
        if element.elements:
            nested = field_label(element.elements, field_id)
            if nested != field_id:
                return nested
    return field_id


def collect_referenced_fields(rules: Sequence[Rule]) -> list[str]:
    """Sorted ids of every field read or written by the rule set."""

    ids: set[str] = set()
    for rule in rules:
        if rule.trigger_field_id:
            ids.add(rule.trigger_field_id)
        ids.update(condition.field_id for condition in rule.conditions)
        ids.update(action.target_id for action in rule.actions)
    return sorted(field_id for field_id in ids if field_id)
