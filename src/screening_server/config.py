"""Server configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  In production
the values are typically overridden via env vars or a ``.env`` file.
"""

import os
from dataclasses import dataclass, field

from screening_core.config import LLMSettings, load_llm_settings


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 3001

    # CORS — the screening front-end origin(s)
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])

    # Fixture directory (None → packaged screening_core/data/)
    fixture_dir: str | None = None

    # Logging
    log_level: str = "INFO"

    # Shared bearer token for the auth gate (None = gate disabled)
    api_auth_token: str | None = None

    # LLM settings, passed by reference into the gateway
    llm: LLMSettings = field(default_factory=LLMSettings)


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` environment variables.

    ``SERVER_CORS_ORIGINS`` is a comma-separated list; when unset the single
    ``FRONTEND_URL`` origin is allowed.
    """
    raw_origins = os.getenv("SERVER_CORS_ORIGINS") or os.getenv(
        "FRONTEND_URL", "http://localhost:3000",
    )
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=int(os.getenv("SERVER_PORT", os.getenv("PORT", "3001"))),
        cors_origins=origins,
        fixture_dir=os.getenv("SERVER_FIXTURE_DIR") or None,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        api_auth_token=os.getenv("API_AUTH_TOKEN") or None,
        llm=load_llm_settings(),
    )
