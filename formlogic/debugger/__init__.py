"""Form logic debugger: stepwise rule evaluation, conflicts, coverage and edge cases."""

from .controls import DebuggerState, continue_execution, start_run, step_over
from .edge_cases import generate_edge_cases, generate_preset_cases
from .schemas import DebugSession, EdgeCase, Rule
from .session import run_debug_session

__all__ = [
    "DebugSession",
    "DebuggerState",
    "EdgeCase",
    "Rule",
    "continue_execution",
    "generate_edge_cases",
    "generate_preset_cases",
    "run_debug_session",
    "start_run",
    "step_over",
]
