"""Open-ended analysis endpoints — one-shot JSON and a streamed variant.

The streamed variant returns ``text/event-stream`` with one JSON object per
``data:`` line::

    data: {"type": "chunk", "text": "..."}
    data: {"type": "chunk", "text": "..."}
    data: {"type": "done", "model": "..."}

The stream always ends with a ``done`` or ``error`` event.  If the client
disconnects, iteration stops and the upstream model request is closed; it
is not retried.
"""

import json
import logging
from typing import AsyncIterator

import anyio
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse

from screening_core.models.analysis import AnalysisEnvelope
from screening_core.models.base import CamelModel
from screening_core.models.completion import StreamEvent
from screening_core.models.patient import PatientInfo, TestResultSet
from screening_core.pipeline import ReportPipeline

from screening_server.dependencies import get_pipeline, require_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"], dependencies=[Depends(require_token)])


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class AnalysisRequest(CamelModel):
    """Body for POST /analyze and /analyze/stream."""
    test_results: TestResultSet
    patient_info: PatientInfo | None = None


# ------------------------------------------------------------------
# SSE helpers
# ------------------------------------------------------------------

def _sse_event(data: dict) -> str:
    """Format a dict as an SSE data event."""
    return f"data: {json.dumps(data)}\n\n"


async def _event_stream(
    request: Request,
    events: AsyncIterator[StreamEvent],
) -> AsyncIterator[str]:
    try:
        async for event in events:
            if await request.is_disconnected():
                logger.info("Client disconnected; closing analysis stream")
                break
            yield _sse_event(event.model_dump(exclude_none=True))
    finally:
        # Shielded so the upstream request is released even when the
        # response task is being cancelled by a disconnect.
        with anyio.CancelScope(shield=True):
            await events.aclose()


# ------------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------------

@router.post("/analyze")
async def analyze(
    body: AnalysisRequest,
    pipeline: ReportPipeline = Depends(get_pipeline),
) -> AnalysisEnvelope:
    """Return scores, interpretations and an open-ended analysis."""
    return await pipeline.analyze(body.test_results, body.patient_info)


@router.post("/analyze/stream")
async def analyze_stream(
    request: Request,
    body: AnalysisRequest,
    pipeline: ReportPipeline = Depends(get_pipeline),
) -> StreamingResponse:
    """Stream the analysis text as server-sent events."""
    events = pipeline.stream_analysis(body.test_results, body.patient_info)
    return StreamingResponse(
        _event_stream(request, events),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )
