"""Viewer session Pydantic models."""
from pydantic import BaseModel, Field


class SelectOptionRequest(BaseModel):
    """Model for choosing an option letter."""

    option: str = Field(..., min_length=1, max_length=8)


class PromptUpdateRequest(BaseModel):
    """Model for editing prompt templates; omitted fields stay unchanged."""

    hintPrompt: str | None = None
    solutionPrompt: str | None = None


class PromptsResponse(BaseModel):
    hintPrompt: str
    solutionPrompt: str
    hintModified: bool
    solutionModified: bool
