"""Condition evaluation against the live field values of a pass."""

from __future__ import annotations

import logging
import math
from typing import Mapping

from .schemas import Condition, ConditionOperator, ConditionResult, FieldValue

logger = logging.getLogger(__name__)


def as_text(value: FieldValue) -> str:
    """Normalize a field value to the string a native form input would hold."""

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def as_number(value: FieldValue) -> float | None:
    """Return the numeric reading of a value, or None when it is not numeric."""

    text = as_text(value).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _compare_numbers(actual: FieldValue, expected: FieldValue, greater: bool) -> bool:
    left = as_number(actual)
    right = as_number(expected)
    if left is None or right is None:
        return False
    return left > right if greater else left < right


def evaluate_condition(condition: Condition, values: Mapping[str, FieldValue]) -> ConditionResult:
    """Evaluate one condition; never raises for missing fields or odd values."""

    actual = values.get(condition.field_id, "")
    if actual is None:
        actual = ""
    actual_text = as_text(actual)
    expected_text = as_text(condition.value)
    operator = condition.operator

    anomaly = None
    if operator == ConditionOperator.EQUALS:
        passed = actual_text == expected_text
    elif operator == ConditionOperator.NOT_EQUALS:
        passed = actual_text != expected_text
    elif operator == ConditionOperator.CONTAINS:
        passed = expected_text.lower() in actual_text.lower()
    elif operator == ConditionOperator.NOT_CONTAINS:
        passed = expected_text.lower() not in actual_text.lower()
    elif operator == ConditionOperator.GREATER_THAN:
        passed = _compare_numbers(actual, condition.value, greater=True)
    elif operator == ConditionOperator.LESS_THAN:
        passed = _compare_numbers(actual, condition.value, greater=False)
    elif operator == ConditionOperator.IS_EMPTY:
        passed = actual_text == ""
    elif operator == ConditionOperator.IS_NOT_EMPTY:
        passed = actual_text != ""
    else:
        passed = False
        anomaly = f"unknown operator '{operator}' on field '{condition.field_id}'"
        logger.warning("Condition anomaly: %s", anomaly)

    return ConditionResult(condition=condition, passed=passed, actual_value=actual, anomaly=anomaly)
