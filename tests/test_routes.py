import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.dependencies import get_gateway, get_registry, get_test_source
from api.services.viewer_service import ViewerSessionRegistry
from core.errors import UpstreamFailure
from core.prompts import DEFAULT_HINT_PROMPT, DEFAULT_SOLUTION_PROMPT

from sample_data import FakeGateway, FakeTestSource, sample_payload


@pytest.fixture
def fakes():
    source = FakeTestSource()
    gateway = FakeGateway()
    registry = ViewerSessionRegistry(source, gateway, limit=3)
    app.dependency_overrides[get_test_source] = lambda: source
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.dependency_overrides[get_registry] = lambda: registry
    yield source, gateway, registry
    app.dependency_overrides.clear()


@pytest.fixture
def client(fakes) -> TestClient:
    return TestClient(app)


@pytest.fixture
def session_id(client) -> str:
    response = client.post("/api/viewer/sessions", json={"testId": "mock-1"})
    assert response.status_code == 200
    return response.json()["sessionId"]


def test_get_test_proxies_document(client) -> None:
    response = client.get("/api/test/mock-1")
    assert response.status_code == 200
    assert response.json() == sample_payload()


def test_get_test_not_found(client) -> None:
    response = client.get("/api/test/unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "Test not found"}


def test_default_prompts(client) -> None:
    response = client.get("/api/generate-solution")
    assert response.json() == {
        "defaultHintPrompt": DEFAULT_HINT_PROMPT,
        "defaultSolutionPrompt": DEFAULT_SOLUTION_PROMPT,
    }


def test_generate_solution(client, fakes) -> None:
    _, gateway, _ = fakes
    response = client.post(
        "/api/generate-solution",
        json={
            "questionText": "Unit of force?",
            "options": [{"text": "Newton"}, {"text": "Joule"}],
            "type": "hint",
            "previousHints": ["Think of F = ma"],
        },
    )
    assert response.status_code == 200
    assert response.json() == {"solution": "hint 1"}
    request = gateway.requests[0]
    assert request.options == ("Newton", "Joule")
    assert request.previous_hints == ("Think of F = ma",)


def test_generate_solution_requires_question_text(client) -> None:
    response = client.post("/api/generate-solution", json={"type": "solution"})
    assert response.status_code == 400
    assert response.json() == {"error": "Question text is required"}


def test_generate_solution_upstream_failure(client, fakes) -> None:
    _, gateway, _ = fakes
    gateway.failure = UpstreamFailure("Failed to generate solution")
    response = client.post("/api/generate-solution", json={"questionText": "Q"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate solution"}


def test_create_session_for_missing_test(client, fakes) -> None:
    _, _, registry = fakes
    response = client.post("/api/viewer/sessions", json={"testId": "missing"})
    assert response.status_code == 404
    assert len(registry) == 0


def test_full_viewer_flow(client, session_id) -> None:
    base = f"/api/viewer/sessions/{session_id}"

    hint = client.post(f"{base}/questions/0-0/hint").json()
    assert hint["applied"] is True
    assert hint["questions"][0]["hints"] == ["hint 1"]

    selected = client.post(f"{base}/questions/0-0/select", json={"option": "a"}).json()
    assert selected["questions"][0]["selectedOption"] == "A"

    early = client.post(f"{base}/questions/0-0/solution").json()
    assert early["applied"] is False

    submitted = client.post(f"{base}/questions/0-0/submit").json()
    assert submitted["score"] == 3
    assert submitted["answered"] == 1
    assert submitted["questions"][0]["status"] == "correct"

    again = client.post(f"{base}/questions/0-0/select", json={"option": "B"}).json()
    assert again["applied"] is False

    solved = client.post(f"{base}/questions/0-0/solution").json()
    assert solved["questions"][0]["solution"] == "solution 2"

    final = client.post(f"{base}/submit").json()
    assert final["submitted"] is True
    assert final["questions"][1]["status"] == "unanswered"
    assert client.post(f"{base}/submit").json()["applied"] is False


def test_invalid_question_key_and_option(client, session_id) -> None:
    base = f"/api/viewer/sessions/{session_id}"
    bad_key = client.post(f"{base}/questions/zero/submit")
    assert bad_key.status_code == 400
    assert bad_key.json() == {"error": "Invalid question key"}

    unknown = client.post(f"{base}/questions/7-0/submit")
    assert unknown.status_code == 404

    bad_option = client.post(f"{base}/questions/0-0/select", json={"option": "AB"})
    assert bad_option.status_code == 400


def test_unknown_session(client) -> None:
    response = client.get("/api/viewer/sessions/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Session not found"}


def test_load_and_close(client, session_id) -> None:
    base = f"/api/viewer/sessions/{session_id}"
    client.post(f"{base}/questions/0-0/select", json={"option": "A"})

    reloaded = client.post(f"{base}/load", json={"testId": "mock-1"}).json()
    assert reloaded["applied"] is True
    assert reloaded["questions"][0]["selectedOption"] is None

    closed = client.post(f"{base}/close").json()
    assert closed["test"] is None
    assert closed["questions"] == []


def test_prompt_manager(client, session_id, fakes) -> None:
    _, gateway, _ = fakes
    base = f"/api/viewer/sessions/{session_id}"

    prompts = client.get(f"{base}/prompts").json()
    assert prompts["hintModified"] is False

    updated = client.put(f"{base}/prompts", json={"hintPrompt": "Brief: {{QUESTION_CONTENT}}"}).json()
    assert updated["hintModified"] is True
    assert updated["solutionModified"] is False

    client.post(f"{base}/questions/1-0/hint")
    assert gateway.requests[-1].custom_prompt == "Brief: {{QUESTION_CONTENT}}"

    reset = client.delete(f"{base}/prompts").json()
    assert reset["hintPrompt"] == DEFAULT_HINT_PROMPT
    assert reset["hintModified"] is False


def test_delete_session(client, session_id) -> None:
    assert client.delete(f"/api/viewer/sessions/{session_id}").status_code == 200
    assert client.get(f"/api/viewer/sessions/{session_id}").status_code == 404


def test_registry_evicts_oldest(client, fakes) -> None:
    _, _, registry = fakes
    ids = [
        client.post("/api/viewer/sessions", json={"testId": "mock-1"}).json()["sessionId"]
        for _ in range(4)
    ]
    assert len(registry) == 3
    assert client.get(f"/api/viewer/sessions/{ids[0]}").status_code == 404
    assert client.get(f"/api/viewer/sessions/{ids[-1]}").status_code == 200


def _crowd_registry_during_fetch(monkeypatch, source, registry) -> None:
    fetch = source.fetch_test

    def crowded_fetch(test_id):
        for _ in range(registry.limit):
            registry.create()
        return fetch(test_id)

    monkeypatch.setattr(source, "fetch_test", crowded_fetch)


def test_session_survives_sessions_created_during_load(client, fakes, monkeypatch) -> None:
    source, _, registry = fakes
    _crowd_registry_during_fetch(monkeypatch, source, registry)

    response = client.post("/api/viewer/sessions", json={"testId": "mock-1"})

    assert response.status_code == 200
    session_id = response.json()["sessionId"]
    assert response.json()["questionCount"] == 3
    assert client.get(f"/api/viewer/sessions/{session_id}").status_code == 200


def test_missing_test_reported_when_sessions_created_during_load(
    client, fakes, monkeypatch
) -> None:
    source, _, registry = fakes
    _crowd_registry_during_fetch(monkeypatch, source, registry)

    response = client.post("/api/viewer/sessions", json={"testId": "missing"})

    assert response.status_code == 404
    assert response.json() == {"error": "Test not found"}
    # the pinned session is dropped; one crowding session was evicted while it was pinned
    assert len(registry) == registry.limit - 1


def test_generate_solution_unknown_type_is_a_solution(client, fakes) -> None:
    _, gateway, _ = fakes
    response = client.post(
        "/api/generate-solution",
        json={"questionText": "Q", "type": "explain", "previousHints": ["ignored"]},
    )
    assert response.status_code == 200
    assert response.json() == {"solution": "solution 1"}
    assert gateway.requests[0].kind == "solution"


def test_generate_solution_lenient_options(client, fakes) -> None:
    _, gateway, _ = fakes
    response = client.post(
        "/api/generate-solution",
        json={"questionText": "Q", "options": [{"text": None}, "plain", {}]},
    )
    assert response.status_code == 200
    assert gateway.requests[0].options == ("", "plain", "")


def test_generate_solution_malformed_body(client, fakes) -> None:
    _, gateway, _ = fakes
    response = client.post(
        "/api/generate-solution", json={"questionText": "Q", "previousHints": 5}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid previousHints"}
    assert gateway.requests == []
