"""Hint and solution generation proxy endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_gateway
from api.models import DefaultPromptsResponse, GenerateSolutionRequest, GenerateSolutionResponse
from api.services.llm_service import OpenRouterGateway
from core.errors import ValidationFailure
from core.prompts import HINT, SOLUTION, GenerationRequest, get_defaults

router = APIRouter(prefix="/api/generate-solution", tags=["generation"])


@router.get("", response_model=DefaultPromptsResponse)
def get_default_prompts() -> dict[str, str]:
    """Default hint and solution templates for the prompt manager."""
    defaults = get_defaults()
    return {
        "defaultHintPrompt": defaults.hint_template,
        "defaultSolutionPrompt": defaults.solution_template,
    }


@router.post("", response_model=GenerateSolutionResponse)
def generate_solution(
    payload: GenerateSolutionRequest,
    gateway: Annotated[OpenRouterGateway, Depends(get_gateway)],
) -> dict[str, str]:
    """Generate a hint or a full solution for one question."""
    if not payload.questionText:
        raise ValidationFailure("Question text is required")
    request = GenerationRequest(
        question_text=payload.questionText,
        kind=HINT if payload.type == HINT else SOLUTION,
        passage_text=payload.passageText,
        options=payload.option_texts(),
        previous_hints=tuple(payload.previousHints or []),
        custom_prompt=payload.customPrompt or None,
    )
    return {"solution": gateway.generate(request)}
