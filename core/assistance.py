"""Transitions for AI hint and solution bookkeeping."""
from __future__ import annotations

from dataclasses import replace

from core.state import HintSolutionState


def begin_hint(state: HintSolutionState) -> HintSolutionState:
    return replace(state, hint_pending=True, hint_error=None)


def finish_hint(state: HintSolutionState, text: str) -> HintSolutionState:
    return replace(state, hint_pending=False, hints=state.hints + (text,))


def fail_hint(state: HintSolutionState, message: str) -> HintSolutionState:
    return replace(state, hint_pending=False, hint_error=message)


def begin_solution(state: HintSolutionState) -> HintSolutionState:
    return replace(state, solution_pending=True, solution_error=None)


def finish_solution(state: HintSolutionState, text: str) -> HintSolutionState:
    # regenerating overwrites, unlike hints
    return replace(state, solution_pending=False, solution=text)


def fail_solution(state: HintSolutionState, message: str) -> HintSolutionState:
    return replace(state, solution_pending=False, solution_error=message)
