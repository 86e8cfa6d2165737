"""FastAPI dependency injection — provides pipeline, fixtures, hub and the auth gate.

Shared objects are built once in the lifespan handler and stashed on
``app.state``; these helpers hand them to route functions.
"""

import hmac

from fastapi import Header, HTTPException, Request, WebSocket

from screening_core.fixtures import FixtureStore
from screening_core.pipeline import ReportPipeline

from screening_server.config import ServerSettings
from screening_server.realtime import SessionHub


# ------------------------------------------------------------------
# Shared objects — stashed on app.state during lifespan
# ------------------------------------------------------------------

def get_settings(request: Request) -> ServerSettings:
    """Return the settings the app was created with."""
    return request.app.state.settings


def get_pipeline(request: Request) -> ReportPipeline:
    """Return the report pipeline singleton from ``app.state``."""
    return request.app.state.pipeline


def get_store(request: Request) -> FixtureStore:
    """Return the FixtureStore singleton from ``app.state``."""
    return request.app.state.store


def get_hub(request: Request) -> SessionHub:
    """Return the real-time SessionHub singleton from ``app.state``."""
    return request.app.state.hub


# ------------------------------------------------------------------
# Auth gate — opaque bearer-token check
# ------------------------------------------------------------------

def token_is_valid(expected: str | None, presented: str | None) -> bool:
    """True if *presented* matches *expected*, or no token is configured.

    Constant-time comparison to prevent timing side-channels.
    """
    if not expected:
        return True
    if not presented:
        return False
    return hmac.compare_digest(presented.encode(), expected.encode())


async def require_token(
    request: Request,
    authorization: str | None = Header(None),
) -> None:
    """Reject the request with 401 unless it carries the configured bearer token.

    When ``API_AUTH_TOKEN`` is unset the gate is open (local development).
    """
    expected: str | None = request.app.state.settings.api_auth_token
    if not expected:
        return

    presented = None
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer":
            presented = credentials.strip()

    if not token_is_valid(expected, presented):
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


def websocket_token_is_valid(websocket: WebSocket) -> bool:
    """Browsers cannot set headers on WebSockets; the token rides in ``?token=``."""
    expected: str | None = websocket.app.state.settings.api_auth_token
    return token_is_valid(expected, websocket.query_params.get("token"))
