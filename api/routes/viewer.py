"""Viewer session endpoints: load a test, answer, score, ask for help.

All handlers are coroutines so every state change runs on the event loop.
"""
from typing import Annotated

from fastapi import APIRouter, Depends

from api.dependencies import get_registry
from api.models import LoadTestRequest, PromptsResponse, PromptUpdateRequest, SelectOptionRequest
from api.services.viewer_service import ViewerSessionRegistry
from api.utils import validate_id, validate_option_letter, validate_question_key
from core.prompts import PromptSettings

router = APIRouter(prefix="/api/viewer/sessions", tags=["viewer"])

Registry = Annotated[ViewerSessionRegistry, Depends(get_registry)]


def _prompts_payload(prompts: PromptSettings) -> dict[str, object]:
    return {
        "hintPrompt": prompts.hint_template,
        "solutionPrompt": prompts.solution_template,
        "hintModified": prompts.hint_modified,
        "solutionModified": prompts.solution_modified,
    }


@router.post("")
async def create_session(payload: LoadTestRequest, registry: Registry) -> dict[str, object]:
    """Open a session and load the requested test into it."""
    test_id = validate_id("testId", payload.testId)
    # Pinned so sessions created while the fetch is in flight cannot evict it.
    session_id, controller = registry.create(pinned=True)
    try:
        await controller.load_test(test_id)
    except Exception:
        if session_id in registry:
            registry.discard(session_id)
        raise
    finally:
        registry.unpin(session_id)
    return registry.snapshot(session_id)


@router.get("/{session_id}")
async def get_session(session_id: str, registry: Registry) -> dict[str, object]:
    """Current state snapshot."""
    return registry.snapshot(session_id)


@router.delete("/{session_id}")
async def delete_session(session_id: str, registry: Registry) -> dict[str, object]:
    registry.discard(session_id)
    return {"status": "deleted", "sessionId": session_id}


@router.post("/{session_id}/load")
async def load_test(
    session_id: str, payload: LoadTestRequest, registry: Registry
) -> dict[str, object]:
    """Replace the loaded test; all answers and hints are discarded."""
    controller = registry.get(session_id)
    test_id = validate_id("testId", payload.testId)
    document = await controller.load_test(test_id)
    return registry.snapshot(session_id, applied=document is not None)


@router.post("/{session_id}/close")
async def close_test(session_id: str, registry: Registry) -> dict[str, object]:
    """Back to the test list."""
    registry.get(session_id).close_test()
    return registry.snapshot(session_id, applied=True)


@router.post("/{session_id}/questions/{key}/select")
async def select_option(
    session_id: str, key: str, payload: SelectOptionRequest, registry: Registry
) -> dict[str, object]:
    controller = registry.get(session_id)
    applied = controller.select_answer(
        validate_question_key(key), validate_option_letter(payload.option)
    )
    return registry.snapshot(session_id, applied=applied)


@router.post("/{session_id}/questions/{key}/submit")
async def submit_question(session_id: str, key: str, registry: Registry) -> dict[str, object]:
    controller = registry.get(session_id)
    applied = controller.submit_question(validate_question_key(key))
    return registry.snapshot(session_id, applied=applied)


@router.post("/{session_id}/questions/{key}/hint")
async def request_hint(session_id: str, key: str, registry: Registry) -> dict[str, object]:
    """Generate the next hint; costs one point on a later correct answer."""
    controller = registry.get(session_id)
    applied = await controller.request_hint(validate_question_key(key))
    return registry.snapshot(session_id, applied=applied)


@router.post("/{session_id}/questions/{key}/solution")
async def request_solution(session_id: str, key: str, registry: Registry) -> dict[str, object]:
    """Generate or regenerate the AI solution for a submitted question."""
    controller = registry.get(session_id)
    applied = await controller.request_solution(validate_question_key(key))
    return registry.snapshot(session_id, applied=applied)


@router.post("/{session_id}/submit")
async def submit_test(session_id: str, registry: Registry) -> dict[str, object]:
    controller = registry.get(session_id)
    applied = controller.submit_test()
    return registry.snapshot(session_id, applied=applied)


@router.get("/{session_id}/prompts", response_model=PromptsResponse)
async def get_prompts(session_id: str, registry: Registry) -> dict[str, object]:
    return _prompts_payload(registry.get(session_id).prompts)


@router.put("/{session_id}/prompts", response_model=PromptsResponse)
async def update_prompts(
    session_id: str, payload: PromptUpdateRequest, registry: Registry
) -> dict[str, object]:
    controller = registry.get(session_id)
    controller.prompts = controller.prompts.update(
        hint_template=payload.hintPrompt,
        solution_template=payload.solutionPrompt,
    )
    return _prompts_payload(controller.prompts)


@router.delete("/{session_id}/prompts", response_model=PromptsResponse)
async def reset_prompts(session_id: str, registry: Registry) -> dict[str, object]:
    """Reset both templates to the defaults."""
    controller = registry.get(session_id)
    controller.prompts = controller.prompts.reset()
    return _prompts_payload(controller.prompts)
