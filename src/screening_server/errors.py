"""Global exception handlers — map failures to client-safe HTTP responses.

Validation failures become 400s with a short message.  Rather than letting
FastAPI return its default 422 body (which echoes the submitted values,
including patient names), we inspect the error locations and pick one of a
few fixed messages.  Anything unexpected becomes a generic 500; the full
traceback stays in the server log.

LLM failures never reach these handlers: the gateway converts them into
fallback content.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from screening_core.errors import ReportValidationError

logger = logging.getLogger(__name__)

MSG_MISSING_DATA = "Missing required data"
MSG_INVALID_PATIENT = "Invalid patient information"
MSG_INVALID_RESULTS = "Invalid test results"
MSG_INVALID_REQUEST = "Invalid request"


def _validation_message(errors: list[dict]) -> str:
    """Pick the client message for a list of pydantic error dicts.

    Checked in order; first match wins:
      1. the body or one of its top-level fields is missing
      2. something under ``patientInfo`` is invalid
      3. something under ``testResults`` is invalid
    """
    for err in errors:
        loc = tuple(err.get("loc", ()))
        if err.get("type") == "missing" and len(loc) <= 2 and loc[:1] == ("body",):
            return MSG_MISSING_DATA
    for err in errors:
        if "patientInfo" in err.get("loc", ()):
            return MSG_INVALID_PATIENT
    for err in errors:
        if "testResults" in err.get("loc", ()):
            return MSG_INVALID_RESULTS
    return MSG_INVALID_REQUEST


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Map request-body validation failures to 400 with a fixed message."""
    errors = list(exc.errors())
    message = _validation_message(errors)
    # Log locations and error types only; input values may contain PHI.
    logger.warning(
        "Validation failed at %s: %s",
        request.url.path,
        [(tuple(e.get("loc", ())), e.get("type")) for e in errors],
    )
    return JSONResponse(status_code=400, content={"detail": message})


async def report_validation_error_handler(
    request: Request, exc: ReportValidationError,
) -> JSONResponse:
    """Map SDK ``ReportValidationError`` to 400; its message is client-safe."""
    logger.warning("ReportValidationError at %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc) or MSG_INVALID_REQUEST})


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Map ``KeyError`` (unknown fixture id) to 404."""
    logger.warning("KeyError at %s: %s", request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
