"""Exceptions raised inside a single rule evaluation."""

from __future__ import annotations


class RuleEvaluationError(Exception):
    """Base class for faults that turn one rule into an ``error`` evaluation."""


class UnsupportedActionError(RuleEvaluationError):
    """Raised when an action type reaches the executor that it cannot apply."""

    def __init__(self, action_type: str, target_id: str):
        self.action_type = action_type
        self.target_id = target_id
        super().__init__(f"unsupported action type '{action_type}' on target '{target_id}'")
