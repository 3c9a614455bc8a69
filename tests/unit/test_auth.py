from datetime import timedelta

import pytest
from jose import jwt
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.testclient import TestClient

from auth import SessionCapability, SessionMiddleware, create_session_token, decode_session_token
from config import Config


async def whoami(request):
    return PlainTextResponse(request.state.session.user_id)


async def health(request):
    return PlainTextResponse("API Running")


@pytest.fixture
def client():
    app = Starlette()
    app.add_middleware(SessionMiddleware)
    app.add_route("/whoami", whoami)
    app.add_route("/", health)
    return TestClient(app)


def test_create_and_decode_session_token_round_trip():
    """Given a minted token, when decoded, it should yield the same user id and an expiry."""
    session = decode_session_token(create_session_token("user-42"))
    assert session.user_id == "user-42"
    assert session.expires_at is not None


@pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
def test_decode_rejects_missing_or_malformed_tokens(token):
    """Given a missing or malformed token, decode_session_token should return None."""
    assert decode_session_token(token) is None


def test_decode_rejects_expired_token():
    """Given an expired token, decode_session_token should return None."""
    token = create_session_token("user-42", expires_in=timedelta(seconds=-5))
    assert decode_session_token(token) is None


def test_decode_rejects_token_signed_with_other_secret():
    """Given a token signed with a different secret, it should be rejected."""
    token = jwt.encode({"sub": "user-42"}, "another-secret", algorithm="HS256")
    assert decode_session_token(token) is None


def test_decode_rejects_token_without_subject():
    """Given a token without a 'sub' claim, it should be rejected."""
    token = jwt.encode({"role": "admin"}, Config.SESSION_SECRET, algorithm=Config.SESSION_ALGORITHM)
    assert decode_session_token(token) is None


def test_capability_resolves_again_on_each_call(monkeypatch):
    """Given a capability, when the secret rotates after entry, resolve should stop returning a session."""
    capability = SessionCapability(create_session_token("user-42"))
    assert capability.resolve().user_id == "user-42"

    monkeypatch.setattr(Config, "SESSION_SECRET", "rotated-secret")
    assert capability.resolve() is None


def test_middleware_accepts_bearer_token(client):
    """Given a valid bearer token, the request should reach the handler with the session attached."""
    token = create_session_token("user-7")
    response = client.get("/whoami", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.text == "user-7"


def test_middleware_accepts_session_cookie(client):
    """Given a valid session cookie and no header, the request should be accepted."""
    client.cookies.set("session_token", create_session_token("user-8"))
    response = client.get("/whoami")
    assert response.status_code == 200
    assert response.text == "user-8"


def test_middleware_rejects_missing_token(client):
    """Given no session, a protected route should return 401 Unauthorized."""
    response = client.get("/whoami")
    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_middleware_rejects_invalid_token(client):
    """Given an invalid token, a protected route should return 401 Unauthorized."""
    response = client.get("/whoami", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired session"


def test_middleware_skips_excluded_paths(client):
    """Given the health check path, no session should be required."""
    response = client.get("/")
    assert response.status_code == 200


def test_middleware_reports_missing_secret(client, monkeypatch):
    """Given no configured secret, requests should fail with a server misconfiguration error."""
    monkeypatch.setattr(Config, "SESSION_SECRET", "")
    response = client.get("/whoami", headers={"Authorization": "Bearer anything"})
    assert response.status_code == 500
    assert response.json()["error"] == "server_error"
