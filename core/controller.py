"""Viewer controller: the single owner of one loaded test and its state."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from core import assistance, scoring
from core.answers import correct_letter, option_letter
from core.documents import (
    QuestionRef,
    TestDocument,
    find_question,
    iter_questions,
    parse_test_document,
)
from core.errors import NotFound, ViewerError
from core.prompts import HINT, SOLUTION, GenerationRequest, PromptSettings
from core.state import HintSolutionState, TestState

log = logging.getLogger(__name__)

HINT_FAILED_MESSAGE = "Failed to generate hint"
SOLUTION_FAILED_MESSAGE = "Failed to generate solution"


class TestSource(Protocol):
    def fetch_test(self, test_id: str) -> dict[str, Any]: ...


class TextGateway(Protocol):
    def generate(self, request: GenerationRequest) -> str: ...


class ViewerController:
    """
    Holds the loaded test, its TestState and the per-question hint/solution
    state, and applies user operations to them.

    State is only ever replaced, never mutated in place. Every load or close
    bumps ``generation``; an async hint or solution that completes under an
    older generation is dropped.
    """

    __test__ = False

    def __init__(
        self,
        test_source: TestSource,
        gateway: TextGateway,
        prompts: PromptSettings | None = None,
    ) -> None:
        self._test_source = test_source
        self._gateway = gateway
        self.prompts = prompts or PromptSettings()
        self.test_id: str | None = None
        self.document: TestDocument | None = None
        self.state = TestState()
        self.assistance: dict[str, HintSolutionState] = {}
        self.generation = 0

    # -- loading ---------------------------------------------------------

    async def load_test(self, test_id: str) -> TestDocument | None:
        """
        Fetch ``test_id`` from the test source and start with empty state.

        Returns None when another load or close happened while fetching.
        """
        self.close_test()
        generation = self.generation
        payload = await asyncio.to_thread(self._test_source.fetch_test, test_id)
        if generation != self.generation:
            log.info("Discarding test %s loaded for a closed view", test_id)
            return None
        return self.open_test(parse_test_document(payload), test_id)

    def open_test(self, document: TestDocument, test_id: str | None = None) -> TestDocument:
        self.generation += 1
        self.test_id = test_id
        self.document = document
        self.state = TestState()
        self.assistance = {}
        log.info(
            "Opened test %s (%s) with %d sections",
            test_id or document.code,
            document.name,
            len(document.sections),
        )
        return document

    def close_test(self) -> None:
        self.generation += 1
        self.test_id = None
        self.document = None
        self.state = TestState()
        self.assistance = {}

    def question(self, key: str) -> QuestionRef:
        if self.document is None:
            raise NotFound("No test loaded")
        return find_question(self.document, key)

    # -- answering -------------------------------------------------------

    def select_answer(self, key: str, letter: str) -> bool:
        self.question(key)
        previous = self.state
        self.state = scoring.select_answer(self.state, key, letter)
        return self.state is not previous

    def submit_question(self, key: str) -> bool:
        ref = self.question(key)
        previous = self.state
        self.state = scoring.submit_question(self.state, key, ref.problem)
        return self.state is not previous

    def submit_test(self) -> bool:
        if self.document is None:
            raise NotFound("No test loaded")
        previous = self.state
        self.state = scoring.submit_test(self.state)
        if self.state is not previous:
            log.info(
                "Test %s submitted: score=%d answered=%d",
                self.test_id,
                scoring.total_score(self.state),
                scoring.answered_count(self.state),
            )
        return self.state is not previous

    @property
    def total_score(self) -> int:
        return scoring.total_score(self.state)

    @property
    def answered_count(self) -> int:
        return scoring.answered_count(self.state)

    # -- AI assistance ---------------------------------------------------

    def hint_state(self, key: str) -> HintSolutionState:
        return self.assistance.get(key) or HintSolutionState()

    def _set_hint_state(self, key: str, value: HintSolutionState) -> None:
        self.assistance = {**self.assistance, key: value}

    def solution_available(self, key: str) -> bool:
        return scoring.is_revealed(self.state, key)

    async def request_hint(self, key: str) -> bool:
        """Generate the next hint for ``key``; False if one is already pending."""
        ref = self.question(key)
        current = self.hint_state(key)
        if current.hint_pending:
            log.debug("Hint for %s already pending, ignoring request", key)
            return False

        generation = self.generation
        request = GenerationRequest.for_problem(
            ref.problem,
            HINT,
            previous_hints=current.hints,
            custom_prompt=self.prompts.custom_prompt(HINT),
        )
        self._set_hint_state(key, assistance.begin_hint(current))

        text, error = await self._generate(request, HINT_FAILED_MESSAGE)
        if generation != self.generation:
            log.info("Dropping hint for %s from a previous test", key)
            return False

        latest = self.hint_state(key)
        if error is not None:
            self._set_hint_state(key, assistance.fail_hint(latest, error))
            return True
        self._set_hint_state(key, assistance.finish_hint(latest, text))
        self.state = scoring.record_hint_used(self.state, key)
        return True

    async def request_solution(self, key: str) -> bool:
        """Generate (or regenerate) the AI solution once ``key`` is revealed."""
        ref = self.question(key)
        if not self.solution_available(key):
            log.debug("Solution for %s requested before submission", key)
            return False
        current = self.hint_state(key)
        if current.solution_pending:
            log.debug("Solution for %s already pending, ignoring request", key)
            return False

        generation = self.generation
        request = GenerationRequest.for_problem(
            ref.problem,
            SOLUTION,
            custom_prompt=self.prompts.custom_prompt(SOLUTION),
        )
        self._set_hint_state(key, assistance.begin_solution(current))

        text, error = await self._generate(request, SOLUTION_FAILED_MESSAGE)
        if generation != self.generation:
            log.info("Dropping solution for %s from a previous test", key)
            return False

        latest = self.hint_state(key)
        if error is not None:
            self._set_hint_state(key, assistance.fail_solution(latest, error))
        else:
            self._set_hint_state(key, assistance.finish_solution(latest, text))
        return True

    async def _generate(
        self, request: GenerationRequest, failure_message: str
    ) -> tuple[str, str | None]:
        try:
            text = await asyncio.to_thread(self._gateway.generate, request)
        except ViewerError as exc:
            log.warning("Generating %s failed: %s", request.kind, exc.message)
            return "", exc.message
        except Exception:
            log.exception("Unexpected error generating %s", request.kind)
            return "", failure_message
        return text, None

    # -- rendering -------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Everything a renderer needs, derived fresh from current state."""
        if self.document is None:
            return {"testId": None, "test": None, "submitted": False, "questions": []}

        questions = []
        for ref in iter_questions(self.document):
            questions.append(self._question_snapshot(ref))
        document = self.document
        return {
            "testId": self.test_id,
            "test": {
                "code": document.code,
                "name": document.name,
                "duration": document.duration,
                "marks": document.marks,
            },
            "submitted": self.state.submitted,
            "score": self.total_score,
            "answered": self.answered_count,
            "questionCount": len(questions),
            "questions": questions,
        }

    def _question_snapshot(self, ref: QuestionRef) -> dict[str, Any]:
        problem = ref.problem
        qstate = self.state.question(ref.key)
        hints = self.hint_state(ref.key)
        revealed = scoring.is_revealed(self.state, ref.key)
        return {
            "key": ref.key,
            "number": ref.number,
            "subject": ref.subject,
            "text": problem.text,
            "passageText": problem.passage_text,
            "options": [
                {"letter": option_letter(index), "text": option.text}
                for index, option in enumerate(problem.options)
            ],
            "selectedOption": qstate.selected_option,
            "submitted": qstate.submitted,
            "hintsUsed": qstate.hints_used,
            "score": qstate.score,
            "isCorrect": qstate.is_correct,
            "status": scoring.question_status(self.state, ref.key),
            "correctOption": correct_letter(problem) if revealed else None,
            "cmsSolution": problem.solution if revealed else None,
            "hints": list(hints.hints),
            "hintPending": hints.hint_pending,
            "hintError": hints.hint_error,
            "solution": hints.solution,
            "solutionPending": hints.solution_pending,
            "solutionError": hints.solution_error,
            "solutionAvailable": revealed,
        }
