"""Loading helpers for rule-set and test-value files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pydantic

from formlogic.debugger.schemas import FieldElement, FieldValue, Rule
from formlogic.debugger.validation import ValidationError, validate_rules, validate_values


@dataclass
class RuleSet:
    """One form's rules plus the optional field schema and saved test values."""

    name: str
    rules: list[Rule]
    elements: list[FieldElement] = field(default_factory=list)
    values: dict[str, FieldValue] = field(default_factory=dict)


def _read_json(path: Path) -> Any:
    if not path.exists() or not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc


def load_rule_set(path: str) -> RuleSet:
    """Load a rule-set file.

    Accepts either a bare list of rules or an object with ``rules`` and optional
    ``elements``, ``values`` and ``name`` keys (the form builder's export shape).
    """

    file_path = Path(path)
    payload = _read_json(file_path)
    if isinstance(payload, list):
        payload = {"rules": payload}
    if not isinstance(payload, dict) or not isinstance(payload.get("rules"), list):
        raise ValidationError(f"{file_path}: expected a list of rules or an object with a 'rules' list")

    try:
        rules = [Rule.model_validate(item) for item in payload["rules"]]
        elements = [FieldElement.model_validate(item) for item in payload.get("elements") or []]
    except pydantic.ValidationError as exc:
        raise ValidationError(f"{file_path}: {exc}") from exc

    values = payload.get("values") or {}
    validate_rules(rules)
    validate_values(values)

    return RuleSet(
        name=str(payload.get("name") or file_path.stem),
        rules=rules,
        elements=elements,
        values=dict(values),
    )


def load_values(path: str) -> dict[str, FieldValue]:
    """Load a test-value file: one JSON object of field id to value."""

    file_path = Path(path)
    payload = _read_json(file_path)
    try:
        validate_values(payload)
    except ValidationError as exc:
        raise ValidationError(f"{file_path}: {exc}") from exc
    return dict(payload)
