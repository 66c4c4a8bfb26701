from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterator

from core.errors import NotFound

PROBLEMS_KEY_SUFFIX = "_problems"


@dataclass(frozen=True)
class Option:
    text: str


@dataclass(frozen=True)
class Problem:
    text: str
    options: tuple[Option, ...] = ()
    passage_text: str | None = None
    solution: str | None = None
    answer: Any = None  # int | str | list of those, as sent by the CMS


@dataclass(frozen=True)
class ProblemSection:
    subject: str
    problems: tuple[Problem, ...] = ()


@dataclass(frozen=True)
class TestDocument:
    __test__ = False

    code: str = ""
    name: str = ""
    duration: str = ""
    marks: str = ""
    sections: tuple[ProblemSection, ...] = field(default_factory=tuple)
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class QuestionRef:
    key: str
    number: int
    subject: str
    problem: Problem


def question_key(section_index: int, problem_index: int) -> str:
    return f"{section_index}-{problem_index}"


def problems_key(subject: str) -> str:
    """CMS field holding a section's problems, e.g. "Physics" -> "physics_problems"."""
    return re.sub(r"\s", "_", subject.lower()) + PROBLEMS_KEY_SUFFIX


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _optional_text(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def parse_problem(payload: dict[str, Any]) -> Problem:
    options_payload = payload.get("options")
    options: list[Option] = []
    if isinstance(options_payload, list):
        for option in options_payload:
            if isinstance(option, dict):
                options.append(Option(text=_text(option.get("text"))))
            else:
                options.append(Option(text=_text(option)))
    return Problem(
        text=_text(payload.get("text")),
        options=tuple(options),
        passage_text=_optional_text(payload.get("passage_text")),
        solution=_optional_text(payload.get("solution")),
        answer=payload.get("answer"),
    )


def parse_section(payload: dict[str, Any]) -> ProblemSection:
    subject = _text(payload.get("subject"))
    problems_payload = payload.get(problems_key(subject))
    problems: list[Problem] = []
    if isinstance(problems_payload, list):
        problems = [
            parse_problem(item) for item in problems_payload if isinstance(item, dict)
        ]
    return ProblemSection(subject=subject, problems=tuple(problems))


def parse_test_document(payload: dict[str, Any]) -> TestDocument:
    """Build a TestDocument from the CMS JSON, skipping malformed sections."""
    sections_payload = payload.get("problems")
    sections: list[ProblemSection] = []
    if isinstance(sections_payload, list):
        sections = [
            parse_section(item) for item in sections_payload if isinstance(item, dict)
        ]
    return TestDocument(
        code=_text(payload.get("code")),
        name=_text(payload.get("name")),
        duration=_text(payload.get("duration")),
        marks=_text(payload.get("marks")),
        sections=tuple(sections),
        raw=payload,
    )


def iter_questions(document: TestDocument) -> Iterator[QuestionRef]:
    """Yield every question in display order with its key and running number."""
    number = 0
    for section_index, section in enumerate(document.sections):
        for problem_index, problem in enumerate(section.problems):
            number += 1
            yield QuestionRef(
                key=question_key(section_index, problem_index),
                number=number,
                subject=section.subject,
                problem=problem,
            )


def find_question(document: TestDocument, key: str) -> QuestionRef:
    for ref in iter_questions(document):
        if ref.key == key:
            return ref
    raise NotFound("Question not found")
