"""SessionHub — room-style WebSocket relay, one room per session id.

Clients (the child's game tablet, a clinician dashboard) join the room for a
screening session.  The hub relays ``session_event`` messages to the other
members and answers ``analysis_request`` messages with a heuristic analysis
broadcast to every member.

Message protocol (JSON text frames)::

    → {"type": "session_event", "event": "trial_completed", "data": {...}}
    ← {"type": "session_event", "event": "trial_completed", "data": {...},
       "sessionId": "...", "receivedAt": "..."}            (to the others)

    → {"type": "analysis_request", "testResults": {...}}
    ← {"type": "analysis", "sessionId": "...", "scores": {...},
       "interpretations": {...}, "analysis": {...}}         (to everyone)

    ← {"type": "participant_joined" | "participant_left",
       "sessionId": "...", "participants": n}               (to the others)
    ← {"type": "error", "detail": "..."}                    (to the sender)

Rooms live in process memory only.  Delivery order is arrival order at the
hub; there is no persistence, acknowledgement or backpressure.  All
coroutines run on the server's event loop, so the room dict is only ever
touched from one thread.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import WebSocket
from fastapi.websockets import WebSocketState
from pydantic import ValidationError

from screening_core.analysis import heuristic_analysis
from screening_core.errors import ReportValidationError
from screening_core.interpretation import interpret_scores
from screening_core.models.patient import TestResultSet
from screening_core.scoring import compute_scores

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_analysis_message(session_id: str, raw_results: Any) -> dict:
    """Score *raw_results* and wrap the heuristic analysis as a hub message.

    Raises:
        ReportValidationError: if the results are missing or malformed
    """
    if not isinstance(raw_results, dict):
        raise ReportValidationError("Missing required data")
    try:
        results = TestResultSet.model_validate(raw_results)
    except ValidationError as exc:
        raise ReportValidationError("Invalid test results") from exc
    scores = compute_scores(results)
    return {
        "type": "analysis",
        "sessionId": session_id,
        "scores": scores.model_dump(by_alias=True),
        "interpretations": interpret_scores(scores).model_dump(by_alias=True),
        "analysis": heuristic_analysis(scores).model_dump(by_alias=True),
        "generatedAt": _now(),
    }


class SessionHub:
    """In-memory registry of WebSocket rooms keyed by session id."""

    def __init__(self) -> None:
        self._rooms: dict[str, set[WebSocket]] = {}

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def participants(self, session_id: str) -> int:
        return len(self._rooms.get(session_id, ()))

    async def join(self, session_id: str, websocket: WebSocket) -> None:
        """Accept *websocket* and add it to the room, announcing it to the others."""
        await websocket.accept()
        self._rooms.setdefault(session_id, set()).add(websocket)
        logger.info("Joined session room (%d participants)", self.participants(session_id))
        await self.broadcast(
            session_id,
            {
                "type": "participant_joined",
                "sessionId": session_id,
                "participants": self.participants(session_id),
            },
            exclude=websocket,
        )

    async def leave(self, session_id: str, websocket: WebSocket) -> None:
        """Remove *websocket*; empty rooms are dropped."""
        room = self._rooms.get(session_id)
        if room is None:
            return
        room.discard(websocket)
        if not room:
            del self._rooms[session_id]
            return
        await self.broadcast(
            session_id,
            {
                "type": "participant_left",
                "sessionId": session_id,
                "participants": len(room),
            },
        )

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    async def broadcast(
        self,
        session_id: str,
        message: dict,
        *,
        exclude: WebSocket | None = None,
    ) -> int:
        """Send *message* to every room member except *exclude*.

        Returns the number of members the message was handed to.  Members
        whose socket fails are dropped from the room.
        """
        delivered = 0
        for member in list(self._rooms.get(session_id, ())):
            if member is exclude:
                continue
            if member.client_state != WebSocketState.CONNECTED:
                self._rooms.get(session_id, set()).discard(member)
                continue
            try:
                await member.send_json(message)
            except (RuntimeError, ConnectionError) as exc:
                logger.info("Dropping unreachable room member (%s)", type(exc).__name__)
                self._rooms.get(session_id, set()).discard(member)
                continue
            delivered += 1
        return delivered

    async def publish_event(self, session_id: str, event: dict, *, exclude: WebSocket | None = None) -> int:
        """Stamp a telemetry event and relay it to the room."""
        message = {
            **event,
            "type": "session_event",
            "sessionId": session_id,
            "receivedAt": _now(),
        }
        return await self.broadcast(session_id, message, exclude=exclude)

    async def handle_message(
        self, session_id: str, websocket: WebSocket, raw: str | None,
    ) -> None:
        """Dispatch one frame received from *websocket*; ``None`` is a non-text frame."""
        if raw is None:
            await websocket.send_json({"type": "error", "detail": "Invalid message"})
            return
        try:
            message = json.loads(raw)
        except json.JSONDecodeError:
            await websocket.send_json({"type": "error", "detail": "Invalid message"})
            return
        if not isinstance(message, dict):
            await websocket.send_json({"type": "error", "detail": "Invalid message"})
            return

        kind = message.get("type")
        if kind == "session_event":
            await self.publish_event(session_id, message, exclude=websocket)
        elif kind == "analysis_request":
            try:
                reply = build_analysis_message(session_id, message.get("testResults"))
            except ReportValidationError as exc:
                await websocket.send_json({"type": "error", "detail": str(exc)})
                return
            await self.broadcast(session_id, reply)
        else:
            await websocket.send_json({"type": "error", "detail": "Unknown message type"})
