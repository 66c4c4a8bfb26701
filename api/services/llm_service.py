"""LLM gateway: renders prompts and calls the OpenRouter chat completion API."""
from __future__ import annotations

import logging
from typing import Any

import requests

from api.config import (
    APP_REFERER,
    APP_TITLE,
    HTTP_TIMEOUT_SECONDS,
    LLM_MAX_TOKENS,
    LLM_MODEL,
    OPENROUTER_API_KEY,
    OPENROUTER_API_URL,
)
from core.errors import UpstreamFailure, ValidationFailure
from core.prompts import GenerationRequest, PromptDefaults, assemble_prompt, get_defaults

log = logging.getLogger(__name__)

GENERATION_FAILED_MESSAGE = "Failed to generate solution"
EMPTY_GENERATION_TEXT = "No solution generated"


def _message_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        parts = [part.get("text") for part in value if isinstance(part, dict)]
        return "".join(part for part in parts if isinstance(part, str))
    return ""


def extract_text(data: dict[str, Any]) -> str:
    """Message content, or the reasoning field some models fill instead.

    Content may arrive as a string or as a list of ``{"type", "text"}`` parts;
    anything else counts as empty.
    """
    choices = data.get("choices") or []
    message = choices[0].get("message") if choices and isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return EMPTY_GENERATION_TEXT
    return (
        _message_text(message.get("content"))
        or _message_text(message.get("reasoning"))
        or EMPTY_GENERATION_TEXT
    )


class OpenRouterGateway:
    def __init__(
        self,
        api_key: str = OPENROUTER_API_KEY,
        api_url: str = OPENROUTER_API_URL,
        model: str = LLM_MODEL,
        max_tokens: int = LLM_MAX_TOKENS,
        timeout: float = HTTP_TIMEOUT_SECONDS,
        defaults: PromptDefaults | None = None,
    ) -> None:
        self.api_url = api_url
        self.model = model
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.defaults = defaults or get_defaults()
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "HTTP-Referer": APP_REFERER,
                "X-Title": APP_TITLE,
            }
        )

    def generate(self, request: GenerationRequest) -> str:
        if not request.question_text:
            raise ValidationFailure("Question text is required")

        prompt = assemble_prompt(request, self.defaults)
        log.info(
            "Type: %s, custom prompt: %s, previous hints: %d",
            request.kind,
            request.custom_prompt is not None,
            len(request.previous_hints),
        )
        log.debug("Prompt preview: %s", prompt[:200])

        body = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
        }
        try:
            response = self.session.post(self.api_url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            log.error("OpenRouter request failed: %s", exc)
            raise UpstreamFailure(GENERATION_FAILED_MESSAGE) from exc

        if not response.ok:
            log.error("OpenRouter returned %s: %s", response.status_code, response.text)
            raise UpstreamFailure(GENERATION_FAILED_MESSAGE)

        try:
            data = response.json()
        except ValueError as exc:
            log.error("OpenRouter returned invalid JSON: %s", exc)
            raise UpstreamFailure(GENERATION_FAILED_MESSAGE) from exc

        text = extract_text(data) if isinstance(data, dict) else EMPTY_GENERATION_TEXT
        log.debug("Extracted %s: %s", request.kind, text[:100])
        return text
