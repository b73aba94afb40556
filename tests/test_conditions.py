import pytest

from formlogic.debugger.conditions import as_number, as_text, evaluate_condition
from formlogic.debugger.schemas import Condition


def _check(operator, value, values, field_id="f"):
    return evaluate_condition(Condition(field_id=field_id, operator=operator, value=value), values)


@pytest.mark.parametrize(
    "operator,value,actual,expected",
    [
        ("equals", "yes", "yes", True),
        ("equals", "yes", "Yes", False),
        ("notEquals", "yes", "no", True),
        ("contains", "corp", "Acme CORP Ltd", True),
        ("notContains", "corp", "Acme Ltd", True),
        ("greaterThan", "18", "20", True),
        ("greaterThan", "18", "18", False),
        ("lessThan", "18", "17.5", True),
        ("isEmpty", None, "", True),
        ("isNotEmpty", None, "x", True),
    ],
)
def test_operators(operator, value, actual, expected):
    assert _check(operator, value, {"f": actual}).passed is expected


@pytest.mark.parametrize(
    "operator,value,actual,expected",
    [
        ("not-equals", "yes", "no", True),
        ("not-contains", "corp", "Acme CORP", False),
        ("greater-than", "18", "20", True),
        ("less-than", "18", "20", False),
        ("is-empty", None, "", True),
        ("is-not-empty", None, "", False),
        ("greater_than", "18", "19", True),
    ],
)
def test_kebab_and_snake_operator_spellings(operator, value, actual, expected):
    result = _check(operator, value, {"f": actual})
    assert result.passed is expected
    assert result.anomaly is None


def test_missing_field_reads_as_empty_string():
    result = _check("isEmpty", None, {})
    assert result.passed is True
    assert result.actual_value == ""

    assert _check("equals", "", {}).passed is True
    assert _check("contains", "a", {}).passed is False


def test_non_numeric_value_fails_numeric_comparison_without_error():
    result = _check("greaterThan", "18", {"f": "abc"})
    assert result.passed is False
    assert result.actual_value == "abc"
    assert result.anomaly is None

    assert _check("lessThan", "18", {"f": ""}).passed is False
    assert _check("lessThan", "n/a", {"f": "3"}).passed is False


def test_unknown_operator_fails_closed_with_anomaly():
    result = _check("startsWith", "a", {"f": "abc"})
    assert result.passed is False
    assert "unknown operator 'startsWith'" in result.anomaly


def test_typed_values_compare_as_form_text():
    assert _check("equals", "20", {"f": 20}).passed is True
    assert _check("equals", "20", {"f": 20.0}).passed is True
    assert _check("equals", "true", {"f": True}).passed is True
    assert _check("greaterThan", 18, {"f": "19"}).passed is True


def test_as_text_and_as_number():
    assert as_text(None) == ""
    assert as_text(False) == "false"
    assert as_text(2.5) == "2.5"
    assert as_number(" 7 ") == 7.0
    assert as_number("") is None
    assert as_number("seven") is None
