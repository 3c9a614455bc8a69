import ollama
import pytest

from tests.fixtures.mock_clients import FailingModelClient, text_chunks
from tests.helpers import assert_sse_event, collect_tokens

CHAT_BODY = {"id": "chat-1", "messages": [{"role": "user", "content": "Hello"}]}


def test_chat_without_session_returns_401_and_saves_nothing(configured_app, booking_store, model_client):
    """Given no session, POST /chat should return 401 without calling the model or persisting."""
    response = configured_app.post("/chat", json=CHAT_BODY)

    assert response.status_code == 401
    assert model_client.call_history == []
    assert booking_store.get_chat_by_id("chat-1") is None


def test_chat_with_invalid_session_returns_401(configured_app):
    response = configured_app.post("/chat", json=CHAT_BODY, headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401


def test_chat_streams_events(configured_app, auth_headers, model_client):
    """Given a valid request, POST /chat should stream token and done events."""
    model_client.turns = [text_chunks("Where to?")]

    with configured_app.stream("POST", "/chat", json=CHAT_BODY, headers=auth_headers) as response:
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/event-stream")
        body = "".join(response.iter_text())

    assert collect_tokens(body) == "Where to? "
    assert_sse_event(body, "done", chatId="chat-1", toolsUsed=[])


def test_chat_rejects_invalid_body(configured_app, auth_headers):
    response = configured_app.post("/chat", json={"messages": []}, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.parametrize("error, expected_status, expected_prefix", [
    (ollama.ResponseError("model 'gemini' not found", 404), 400, "AI model error"),
    (ollama.ResponseError("invalid API key", 401), 403, "AI service error"),
    (ollama.ResponseError("quota exceeded", 429), 403, "AI service error"),
    (ollama.ResponseError("upstream exploded", 500), 500, "Internal server error"),
    (ConnectionError("Failed to connect to Ollama"), 500, "Internal server error"),
])
def test_model_failures_before_streaming_map_to_json_errors(
    configured_app, auth_headers, monkeypatch, booking_store, error, expected_status, expected_prefix
):
    """Given a model failure on the first call, POST /chat should return a JSON error with a mapped status."""
    monkeypatch.setattr("utils.http_client.HTTPClientManager.get_model_client", lambda: FailingModelClient(error))

    response = configured_app.post("/chat", json=CHAT_BODY, headers=auth_headers)

    assert response.status_code == expected_status
    assert response.json()["error"].startswith(expected_prefix)
    assert booking_store.get_chat_by_id("chat-1") is None


def test_model_failure_mid_stream_emits_error_event(configured_app, auth_headers, model_client, monkeypatch):
    """Given a failure after streaming began, the error should arrive as an SSE error event."""
    async def broken_stream():
        yield {"message": {"role": "assistant", "content": "Let me "}, "done": False}
        raise ollama.ResponseError("connection reset")

    class HalfBrokenClient:
        async def chat(self, **kwargs):
            return broken_stream()

    monkeypatch.setattr("utils.http_client.HTTPClientManager.get_model_client", lambda: HalfBrokenClient())

    with configured_app.stream("POST", "/chat", json=CHAT_BODY, headers=auth_headers) as response:
        body = "".join(response.iter_text())

    assert response.status_code == 200
    assert collect_tokens(body) == "Let me "
    assert_sse_event(body, "error", type="model_error", message="connection reset")
