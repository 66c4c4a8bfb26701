"""Sample CMS payloads and fake collaborators shared by the tests."""
from __future__ import annotations

import threading
from typing import Any

from core.errors import NotFound
from core.prompts import GenerationRequest


def sample_payload() -> dict[str, Any]:
    return {
        "code": "JEE-MOCK-01",
        "name": "Mock Test 1",
        "duration": "180",
        "marks": "12",
        "problems": [
            {
                "subject": "Physics",
                "physics_problems": [
                    {
                        "text": "What is the SI unit of force?",
                        "options": [{"text": "Newton"}, {"text": "Joule"}, {"text": "Watt"}],
                        "answer": ["1"],
                        "solution": "Force is measured in newtons.",
                    },
                    {
                        "text": "Which quantity is a vector?",
                        "passage_text": "Consider the quantities below.",
                        "options": [{"text": "Mass"}, {"text": "Velocity"}],
                        "answer": 2,
                    },
                ],
            },
            {
                "subject": "Organic Chemistry",
                "organic_chemistry_problems": [
                    {
                        "text": "Pick the alkane.",
                        "options": [{"text": "C2H4"}, {"text": "C2H2"}, {"text": "C2H6"}],
                        "answer": " c ",
                    }
                ],
            },
        ],
    }


class FakeTestSource:
    def __init__(self, documents: dict[str, dict[str, Any]] | None = None) -> None:
        self.documents = documents if documents is not None else {"mock-1": sample_payload()}
        self.calls: list[str] = []

    def fetch_test(self, test_id: str) -> dict[str, Any]:
        self.calls.append(test_id)
        if test_id not in self.documents:
            raise NotFound("Test not found")
        return self.documents[test_id]


class FakeGateway:
    """Returns numbered texts, or raises ``failure`` when set."""

    def __init__(self) -> None:
        self.requests: list[GenerationRequest] = []
        self.failure: Exception | None = None
        self.on_generate = None

    def generate(self, request: GenerationRequest) -> str:
        self.requests.append(request)
        if self.on_generate is not None:
            self.on_generate(request)
        if self.failure is not None:
            raise self.failure
        return f"{request.kind} {len(self.requests)}"


class BlockingGateway(FakeGateway):
    """Holds every call until ``release`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.started = threading.Event()
        self.release = threading.Event()

    def generate(self, request: GenerationRequest) -> str:
        self.started.set()
        self.release.wait(timeout=5)
        return super().generate(request)


