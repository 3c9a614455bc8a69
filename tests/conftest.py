import pytest
from unittest.mock import AsyncMock, MagicMock

TEST_SECRET = "test-session-secret"


@pytest.fixture(autouse=True)
def session_secret(monkeypatch):
    """Sign and verify session tokens with a fixed test secret."""
    from config import Config
    monkeypatch.setattr(Config, "SESSION_SECRET", TEST_SECRET)
    return TEST_SECRET


@pytest.fixture
def booking_store(tmp_path, monkeypatch):
    """Fresh SQLite store installed as the global store."""
    from utils.store import BookingStore
    store = BookingStore(db_path=str(tmp_path / "bookings.db"))
    monkeypatch.setattr("utils.store._store", store)
    return store


@pytest.fixture
def session_token():
    from auth import create_session_token
    return create_session_token("user-a")


@pytest.fixture
def auth_headers(session_token):
    """Authentication headers for API requests."""
    return {"Authorization": f"Bearer {session_token}"}


@pytest.fixture
def other_user_headers():
    from auth import create_session_token
    return {"Authorization": f"Bearer {create_session_token('user-b')}"}


@pytest.fixture
def capability(session_token):
    from auth import SessionCapability
    return SessionCapability(session_token)


@pytest.fixture
def model_client():
    from tests.fixtures.mock_clients import ScriptedModelClient
    return ScriptedModelClient()


@pytest.fixture
def chat_context(model_client, capability):
    """Standard ChatContext for testing."""
    from models.chat_models import ChatContext
    return ChatContext(
        chat_id="chat-1",
        client=model_client,
        capability=capability,
        core_messages=[{"role": "user", "content": "book SFO to JFK"}],
        system_prompt="sys"
    )


@pytest.fixture
def mock_http_client():
    """Mock HTTP client for weather lookups."""
    client = MagicMock()
    client.get = AsyncMock()
    return client


@pytest.fixture
def configured_app(monkeypatch, booking_store, model_client):
    """Pre-configured app with the session middleware, a temp store and a scripted model client."""
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from auth import SessionMiddleware
    from routes import chat, chat_stream

    app = FastAPI()
    app.add_middleware(SessionMiddleware)
    app.include_router(chat_stream.router)
    app.include_router(chat.router)

    monkeypatch.setattr("utils.http_client.HTTPClientManager.get_model_client", lambda: model_client)

    with TestClient(app) as client:
        yield client
