"""Pydantic models."""
from api.models.generation import (
    DefaultPromptsResponse,
    GenerateSolutionRequest,
    GenerateSolutionResponse,
    OptionPayload,
)
from api.models.tests import LoadTestRequest
from api.models.viewer import PromptsResponse, PromptUpdateRequest, SelectOptionRequest

__all__ = [
    "DefaultPromptsResponse",
    "GenerateSolutionRequest",
    "GenerateSolutionResponse",
    "LoadTestRequest",
    "OptionPayload",
    "PromptUpdateRequest",
    "PromptsResponse",
    "SelectOptionRequest",
]
