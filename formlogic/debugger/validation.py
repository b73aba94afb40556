"""Input validation for rule sets and value stores.

The engine tolerates malformed rules by design of its error model; these checks
are for loaders and the command line, where a bad file should be rejected early.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from .schemas import Rule


class ValidationError(ValueError):
    """Raised when a rule set or value store is structurally invalid."""


def validate_rules(rules: Sequence[Rule]) -> None:
    """Validate rule collection structure."""

    if not isinstance(rules, Sequence) or isinstance(rules, (str, bytes)):
        raise ValidationError("rules must be a sequence")

    seen_ids: set[str] = set()
    for rule in rules:
        if not isinstance(rule, Rule):
            raise ValidationError("all rules must be Rule instances")
        if rule.id in seen_ids:
            raise ValidationError(f"duplicate rule id: {rule.id}")
        seen_ids.add(rule.id)


def validate_values(values: Any) -> None:
    """Validate a value store: field id to scalar test value."""

    if not isinstance(values, Mapping):
        raise ValidationError("values must be a mapping of field id to value")

    bad = [key for key, value in values.items() if not isinstance(value, (str, int, float, bool, type(None)))]
    if bad:
        raise ValidationError(f"non-scalar value(s) for field(s): {', '.join(sorted(map(str, bad)))}")
