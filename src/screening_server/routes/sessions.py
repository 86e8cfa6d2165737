"""Session telemetry endpoint — HTTP entry into the real-time rooms.

Clients that cannot hold a WebSocket open (or server-side jobs) can post an
event here; it is relayed to every member of the session room.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from screening_server.dependencies import get_hub, require_token
from screening_server.realtime import SessionHub

router = APIRouter(
    prefix="/sessions",
    tags=["sessions"],
    dependencies=[Depends(require_token)],
)


class SessionEvent(BaseModel):
    """Body for POST /sessions/{session_id}/events."""
    event: str = Field(min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


@router.post("/{session_id}/events", status_code=202)
async def post_session_event(
    session_id: str,
    body: SessionEvent,
    hub: SessionHub = Depends(get_hub),
) -> dict:
    """Relay *body* to the session room; returns how many members received it."""
    delivered = await hub.publish_event(session_id, body.model_dump())
    return {"delivered": delivered}
