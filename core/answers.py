"""Answer normalisation: CMS answer values and option positions to letters."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from core.documents import Problem

FIRST_LETTER = "A"
ALPHABET_SIZE = 26


def option_letter(index: int) -> str:
    """0-based option position to its letter (0 -> "A")."""
    return chr(ord(FIRST_LETTER) + index)


def _first_value(raw: Any) -> Any:
    if isinstance(raw, (str, bytes)):
        return raw
    if isinstance(raw, Sequence):
        return raw[0] if raw else None
    return raw


def _as_position(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def answer_letter(raw: Any) -> str:
    """
    Canonical correct-option letter for a raw CMS answer.

    The CMS stores answers 1-indexed, either as numbers, numeric strings or a
    one-element list of those (["1"] -> "A"); letters are accepted as-is in
    any case. Missing or unusable values give "" which never matches a
    selection.
    """
    value = _first_value(raw)
    if value is None:
        return ""
    position = _as_position(value)
    if position is not None:
        if 1 <= position <= ALPHABET_SIZE:
            return option_letter(position - 1)
        return ""
    return str(value).strip().upper()


def correct_letter(problem: Problem) -> str:
    return answer_letter(problem.answer)


def is_correct_selection(selected: str | None, problem: Problem) -> bool:
    expected = correct_letter(problem)
    return bool(selected) and bool(expected) and selected == expected
