"""Utility modules."""
from api.utils.validation import (
    validate_id,
    validate_option_letter,
    validate_question_key,
)

__all__ = [
    "validate_id",
    "validate_option_letter",
    "validate_question_key",
]
