"""Route registration — mounts the REST routers under ``/api/v1``.

The WebSocket relay is mounted at the root (``/ws/...``) so that browser
clients can reach it without the REST prefix.
"""

from fastapi import FastAPI

from screening_server.routes.analysis import router as analysis_router
from screening_server.routes.fixtures import router as fixtures_router
from screening_server.routes.realtime import router as realtime_router
from screening_server.routes.reports import router as reports_router
from screening_server.routes.sessions import router as sessions_router

API_PREFIX = "/api/v1"


def register_routes(app: FastAPI) -> None:
    """Include all sub-routers."""
    app.include_router(reports_router, prefix=API_PREFIX)
    app.include_router(analysis_router, prefix=API_PREFIX)
    app.include_router(fixtures_router, prefix=API_PREFIX)
    app.include_router(sessions_router, prefix=API_PREFIX)
    app.include_router(realtime_router)
