"""
Session authentication.

Requests carry a signed session token (HS256 JWT, `sub` = user id) in the
Authorization header or the `session_token` cookie. The middleware rejects
requests without a valid session; SessionCapability re-checks the same token
wherever a chat or reservation is read or written later in the request.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware
from config import Config
from utils.logger import app_logger

SESSION_COOKIE = "session_token"


@dataclass(frozen=True)
class Session:
    """Authenticated caller identity."""
    user_id: str
    expires_at: Optional[datetime] = None


def create_session_token(user_id: str, expires_in: Optional[timedelta] = None) -> str:
    """Mint a signed session token for a user."""
    if expires_in is None:
        expires_in = timedelta(minutes=Config.SESSION_TTL_MINUTES)
    claims = {"sub": user_id, "exp": datetime.now(timezone.utc) + expires_in}
    return jwt.encode(claims, Config.SESSION_SECRET, algorithm=Config.SESSION_ALGORITHM)


def decode_session_token(token: Optional[str]) -> Optional[Session]:
    """
    Decode and verify a session token.

    Returns:
        Session for a valid, unexpired token carrying a subject, otherwise None
    """
    if not token or not Config.SESSION_SECRET:
        return None

    try:
        payload = jwt.decode(token, Config.SESSION_SECRET, algorithms=[Config.SESSION_ALGORITHM])
    except JWTError as e:
        app_logger.warning(f"Session token rejected: {e}")
        return None

    user_id = payload.get("sub")
    if not user_id:
        app_logger.warning("Session token missing 'sub' claim")
        return None

    exp = payload.get("exp")
    expires_at = datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None
    return Session(user_id=str(user_id), expires_at=expires_at)


def extract_session_token(request: Request) -> Optional[str]:
    """Read the bearer token from the Authorization header, falling back to the cookie."""
    header = request.headers.get("Authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(SESSION_COOKIE) or None


class SessionCapability:
    """
    Handle for re-resolving the caller's session at the point of use.

    Tool executions run while the model streams, well after the request
    entered the middleware, so mutating steps call resolve() again instead
    of trusting the identity captured at entry.
    """

    def __init__(self, token: Optional[str]):
        self._token = token

    def resolve(self) -> Optional[Session]:
        return decode_session_token(self._token)

    @classmethod
    def from_request(cls, request: Request) -> "SessionCapability":
        return cls(getattr(request.state, "session_token", None))


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Resolves the caller's session and stores it on request.state.
    """

    EXCLUDED_PATHS = {"/", "/docs", "/openapi.json", "/redoc"}

    async def dispatch(self, request: Request, call_next):
        """
        Process each request and verify the session token.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/handler in chain

        Returns:
            Response from next handler or error response
        """
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        if not Config.SESSION_SECRET:
            app_logger.error("CRITICAL: SESSION_SECRET not set in .env file!")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "detail": "Server misconfiguration: SESSION_SECRET not set.",
                    "error": "server_error"
                },
            )

        client_host = request.client.host if request.client else "unknown"
        token = extract_session_token(request)

        if not token:
            app_logger.warning(f"Unauthorized request from {client_host} - Missing session token")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "detail": "Missing session. Include an 'Authorization: Bearer <token>' header.",
                    "error": "unauthorized"
                },
                headers={"WWW-Authenticate": "Bearer"},
            )

        session = decode_session_token(token)
        if session is None:
            app_logger.warning(f"Unauthorized request from {client_host} - Invalid or expired session")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "detail": "Invalid or expired session",
                    "error": "unauthorized"
                },
                headers={"WWW-Authenticate": "Bearer"},
            )

        request.state.session = session
        request.state.session_token = token
        return await call_next(request)
