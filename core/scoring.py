"""Answer selection, submission and score arithmetic over TestState."""
from __future__ import annotations

import logging
from dataclasses import replace

from core.answers import is_correct_selection
from core.documents import Problem
from core.state import QuestionState, TestState

log = logging.getLogger(__name__)

CORRECT_ANSWER_POINTS = 4
HINT_PENALTY = 1

STATUS_CORRECT = "correct"
STATUS_INCORRECT = "incorrect"
STATUS_UNANSWERED = "unanswered"
STATUS_SELECTED = "selected"
STATUS_OPEN = "open"


def question_score(is_correct: bool, hints_used: int) -> int:
    if not is_correct:
        return 0
    return max(0, CORRECT_ANSWER_POINTS - HINT_PENALTY * hints_used)


def select_answer(state: TestState, key: str, letter: str) -> TestState:
    current = state.question(key)
    if state.submitted or current.submitted:
        return state
    updated = replace(current, selected_option=letter, submitted=False, score=0)
    return state.with_question(key, updated)


def submit_question(state: TestState, key: str, problem: Problem) -> TestState:
    current = state.question(key)
    if state.submitted or current.submitted or not current.selected_option:
        return state
    is_correct = is_correct_selection(current.selected_option, problem)
    score = question_score(is_correct, current.hints_used)
    log.debug(
        "Question %s submitted: %s, correct=%s, score=%s",
        key,
        current.selected_option,
        is_correct,
        score,
    )
    updated = replace(current, submitted=True, is_correct=is_correct, score=score)
    return state.with_question(key, updated)


def record_hint_used(state: TestState, key: str) -> TestState:
    current = state.question(key)
    return state.with_question(key, replace(current, hints_used=current.hints_used + 1))


def submit_test(state: TestState) -> TestState:
    """
    Close the test for further answers.

    Questions that were never individually submitted stay unscored; they
    count as unanswered and add nothing to the total.
    """
    if state.submitted:
        return state
    return TestState(questions=dict(state.questions), submitted=True)


def total_score(state: TestState) -> int:
    return sum(q.score for q in state.questions.values() if q.submitted)


def answered_count(state: TestState) -> int:
    return sum(1 for q in state.questions.values() if q.submitted)


def question_status(state: TestState, key: str) -> str:
    current = state.question(key)
    if current.submitted:
        return STATUS_CORRECT if current.is_correct else STATUS_INCORRECT
    if state.submitted:
        return STATUS_UNANSWERED
    if current.selected_option:
        return STATUS_SELECTED
    return STATUS_OPEN


def is_revealed(state: TestState, key: str) -> bool:
    """Whether results and solutions for ``key`` may be shown."""
    return state.submitted or state.question(key).submitted
