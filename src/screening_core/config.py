"""LLM configuration — one explicit, immutable object built at startup.

The gateway never reads the environment itself; ``load_llm_settings()`` is
called once (by the server or a script) and the result is passed in.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class LLMSettings:
    """Immutable LLM configuration read from environment at startup."""

    # Credential; None means the live backend is unavailable and every
    # request is answered by the deterministic fallback.
    api_key: str | None = None
    model: str = "gpt-4"
    # Optional OpenAI-compatible endpoint (proxy, Azure gateway, local server)
    base_url: str | None = None

    # Per-request upstream timeout.  Requests are never retried.
    timeout_seconds: float = 60.0

    # Report generation favours determinism; open-ended analysis a bit less.
    report_temperature: float = 0.3
    report_max_tokens: int = 1500
    analysis_temperature: float = 0.7
    analysis_max_tokens: int = 800

    @property
    def live_enabled(self) -> bool:
        return bool(self.api_key)


def load_llm_settings() -> LLMSettings:
    """Build settings from ``OPENAI_*`` / ``LLM_*`` / ``*_TEMPERATURE`` env vars."""
    return LLMSettings(
        api_key=os.getenv("OPENAI_API_KEY") or None,
        model=os.getenv("OPENAI_MODEL", "gpt-4"),
        base_url=os.getenv("OPENAI_BASE_URL") or None,
        timeout_seconds=float(os.getenv("LLM_TIMEOUT_SECONDS", "60")),
        report_temperature=float(os.getenv("REPORT_TEMPERATURE", "0.3")),
        report_max_tokens=int(os.getenv("REPORT_MAX_TOKENS", "1500")),
        analysis_temperature=float(os.getenv("ANALYSIS_TEMPERATURE", "0.7")),
        analysis_max_tokens=int(os.getenv("ANALYSIS_MAX_TOKENS", "800")),
    )
