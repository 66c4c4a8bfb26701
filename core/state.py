"""Immutable per-question and per-test state records."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class QuestionState:
    selected_option: str | None = None
    submitted: bool = False
    hints_used: int = 0
    score: int = 0
    is_correct: bool | None = None


@dataclass(frozen=True)
class HintSolutionState:
    hint_pending: bool = False
    solution_pending: bool = False
    hints: tuple[str, ...] = ()
    solution: str | None = None
    hint_error: str | None = None
    solution_error: str | None = None


@dataclass(frozen=True)
class TestState:
    __test__ = False

    questions: Mapping[str, QuestionState] = field(default_factory=dict)
    submitted: bool = False

    def question(self, key: str) -> QuestionState:
        """State for ``key``; questions never touched read as empty."""
        return self.questions.get(key) or QuestionState()

    def with_question(self, key: str, state: QuestionState) -> TestState:
        return TestState(
            questions={**self.questions, key: state},
            submitted=self.submitted,
        )
