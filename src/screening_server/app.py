"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads fixtures and builds the report pipeline once
  - CORS middleware for the screening front-end
  - Global exception handlers (validation → 400, unknown id → 404, rest → 500)
  - All REST routes mounted under ``/api/v1`` and the WebSocket relay at ``/ws``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``screening-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from screening_core.errors import ReportValidationError
from screening_core.fixtures import FixtureStore
from screening_core.gateway import LLMGateway
from screening_core.pipeline import ReportPipeline
from screening_core.prompt import PromptManager

from screening_server.config import ServerSettings, load_settings
from screening_server.errors import (
    generic_error_handler,
    key_error_handler,
    report_validation_error_handler,
    request_validation_error_handler,
)
from screening_server.realtime import SessionHub
from screening_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan — runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup, tear down on shutdown.

    Startup:
      1. Load the fixture YAML into a ``FixtureStore``
      2. Build ``PromptManager``, ``LLMGateway`` and ``ReportPipeline``
      3. Create the in-memory ``SessionHub``
      4. Stash them on ``app.state`` for dependency injection

    Tests may pre-populate ``app.state.gateway`` with a gateway wrapping a
    fake backend; it is used as-is.

    Shutdown:
      1. Close the live LLM client's connection pool
    """
    settings: ServerSettings = app.state.settings

    # --- Load fixtures ---
    store = FixtureStore(data_dir=settings.fixture_dir)
    store.load()

    # --- Build pipeline ---
    prompts = PromptManager()
    gateway = getattr(app.state, "gateway", None) or LLMGateway(settings.llm, prompts)
    pipeline = ReportPipeline(gateway, prompts, settings.llm)
    logger.info(
        "Report pipeline ready (live LLM: %s)",
        "yes" if gateway.live_available else "no",
    )

    app.state.store = store
    app.state.gateway = gateway
    app.state.pipeline = pipeline
    app.state.hub = SessionHub()

    yield

    # --- Shutdown ---
    await gateway.aclose()
    logger.info("LLM gateway closed")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(
    settings: ServerSettings | None = None,
    *,
    gateway: LLMGateway | None = None,
) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Screening Report API",
        description="Scores cognitive screening tests and drafts clinical reports",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings
    if gateway is not None:
        app.state.gateway = gateway

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ReportValidationError, report_validation_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Liveness probe — no external dependencies are checked."""
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn screening_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``screening-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "screening_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
