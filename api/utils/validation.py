"""Validation utilities."""
import re
from pathlib import Path

from core.errors import ValidationFailure

QUESTION_KEY_PATTERN = re.compile(r"^\d+-\d+$")


def validate_id(name: str, value: str) -> str:
    """Validate ID string (no path traversal, it ends up in a CMS URL)."""
    if not isinstance(value, str):
        raise ValidationFailure(f"{name} is required")
    cleaned = value.strip()
    if not cleaned:
        raise ValidationFailure(f"{name} is required")
    if Path(cleaned).name != cleaned or "/" in cleaned or "\\" in cleaned:
        raise ValidationFailure(f"Invalid {name}")
    return cleaned


def validate_question_key(value: str) -> str:
    """Validate a "<section>-<question>" key."""
    cleaned = value.strip() if isinstance(value, str) else ""
    if not QUESTION_KEY_PATTERN.match(cleaned):
        raise ValidationFailure("Invalid question key")
    return cleaned


def validate_option_letter(value: str) -> str:
    """Normalise an option letter to a single uppercase ASCII letter."""
    cleaned = value.strip().upper() if isinstance(value, str) else ""
    if len(cleaned) != 1 or not ("A" <= cleaned <= "Z"):
        raise ValidationFailure("Invalid option")
    return cleaned
