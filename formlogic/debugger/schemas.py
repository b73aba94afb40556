"""Schemas for the form logic debugger."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FieldValue = Union[str, int, float, bool, None]


class ConditionOperator(str, Enum):
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"
    CONTAINS = "contains"
    NOT_CONTAINS = "notContains"
    GREATER_THAN = "greaterThan"
    LESS_THAN = "lessThan"
    IS_EMPTY = "isEmpty"
    IS_NOT_EMPTY = "isNotEmpty"


class ActionType(str, Enum):
    SHOW = "show"
    HIDE = "hide"
    ENABLE = "enable"
    DISABLE = "disable"
    REQUIRE = "require"
    SET_VALUE = "setValue"
    NAVIGATE = "navigate"


class LogicOperator(str, Enum):
    AND = "AND"
    OR = "OR"


class RuleStatus(str, Enum):
    PENDING = "pending"
    FIRED = "fired"
    SKIPPED = "skipped"
    BREAKPOINT = "breakpoint"
    ERROR = "error"


def _spellings(enum: type[Enum]) -> dict[str, str]:
    """Map every accepted spelling of a member onto its camelCase wire value.

    The form builder stores camelCase (``greaterThan``); rule documents written
    by hand often use kebab-case (``greater-than``) or snake_case.
    """

    spellings: dict[str, str] = {}
    for member in enum:
        spellings[member.value] = member.value
        spellings[member.name.lower()] = member.value
        spellings[member.name.lower().replace("_", "-")] = member.value
    return spellings


_OPERATOR_SPELLINGS = _spellings(ConditionOperator)
_ACTION_SPELLINGS = _spellings(ActionType)


def _canonical(value, spellings: dict[str, str]):
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return spellings.get(value, value)
    return value


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Condition(_WireModel):
    field_id: str
    # Plain string: unknown operators are reported by the evaluator, not rejected here.
    # Known spellings are folded to the camelCase value; anything else passes through.
    operator: str
    value: FieldValue = None

    @field_validator("operator", mode="before")
    @classmethod
    def canonical_operator(cls, value):
        return _canonical(value, _OPERATOR_SPELLINGS)


class Action(_WireModel):
    type: str
    target_id: str
    value: FieldValue = None

    @field_validator("type", mode="before")
    @classmethod
    def canonical_type(cls, value):
        return _canonical(value, _ACTION_SPELLINGS)


class Rule(_WireModel):
    id: str
    name: str
    enabled: bool = True
    trigger: str | None = None
    trigger_field_id: str | None = None
    conditions: list[Condition] = Field(default_factory=list)
    condition_operator: LogicOperator = LogicOperator.AND
    actions: list[Action] = Field(default_factory=list)


class FieldElement(_WireModel):
    """Form element as delivered by the form builder; only id and label matter here."""

    id: str
    label: str | None = None
    type: str | None = None
    elements: list[FieldElement] = Field(default_factory=list)


class FieldStateSnapshot(_WireModel):
    field_values: dict[str, FieldValue] = Field(default_factory=dict)
    visibility: dict[str, bool] = Field(default_factory=dict)
    required_state: dict[str, bool] = Field(default_factory=dict)
    enabled_state: dict[str, bool] = Field(default_factory=dict)
    set_values: dict[str, FieldValue] = Field(default_factory=dict)


class ConditionResult(_WireModel):
    condition: Condition
    passed: bool
    actual_value: FieldValue = ""
    anomaly: str | None = None


class RuleEvaluation(_WireModel):
    rule_id: str
    rule_name: str
    status: RuleStatus
    conditions_met: bool = False
    condition_results: list[ConditionResult] = Field(default_factory=list)
    executed_actions: list[Action] = Field(default_factory=list)
    error: str | None = None


class RuleRef(_WireModel):
    id: str
    name: str


class RuleConflict(_WireModel):
    target_id: str
    description: str
    rule_a: RuleRef
    rule_b: RuleRef


class Coverage(_WireModel):
    fired: int = 0
    total: int = 0
    percentage: int = Field(default=0, ge=0, le=100)


class DebugSession(_WireModel):
    """Result of one debugger pass.

    ``evaluations`` is in rule order. When the pass paused, its last entry is a
    ``breakpoint`` placeholder for the rule at ``paused_at_index``; that rule has
    not been evaluated and carries no condition results.
    """

    evaluations: list[RuleEvaluation] = Field(default_factory=list)
    snapshot: FieldStateSnapshot = Field(default_factory=FieldStateSnapshot)
    trace: list[str] = Field(default_factory=list)
    conflicts: list[RuleConflict] = Field(default_factory=list)
    coverage: Coverage = Field(default_factory=Coverage)
    paused_at_index: int | None = None
    next_index: int | None = None
    stepping: bool = False


class EdgeCase(_WireModel):
    label: str
    description: str
    values: dict[str, FieldValue] = Field(default_factory=dict)
    probes: list[FieldValue] = Field(default_factory=list)
