"""Pydantic models for the hint/solution proxy."""
from pydantic import BaseModel


class OptionPayload(BaseModel):
    """One answer option as the CMS sends it."""

    text: str | None = None


class GenerateSolutionRequest(BaseModel):
    """Model for a hint or solution generation request.

    Any ``type`` other than "hint" is served as a solution. Options may be
    ``{"text": ...}`` objects or bare strings.
    """

    questionText: str | None = None
    passageText: str | None = None
    options: list[OptionPayload | str] | None = None
    type: str = "solution"
    previousHints: list[str] | None = None
    customPrompt: str | None = None

    def option_texts(self) -> tuple[str, ...]:
        texts = []
        for option in self.options or []:
            if isinstance(option, OptionPayload):
                texts.append(option.text or "")
            else:
                texts.append(option)
        return tuple(texts)


class GenerateSolutionResponse(BaseModel):
    solution: str


class DefaultPromptsResponse(BaseModel):
    defaultHintPrompt: str
    defaultSolutionPrompt: str
