"""WebSocket endpoint for the per-session real-time rooms."""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from screening_server.dependencies import websocket_token_is_valid

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws/sessions/{session_id}")
async def session_socket(websocket: WebSocket, session_id: str) -> None:
    """Join the room for *session_id* and relay frames until the client leaves."""
    if not websocket_token_is_valid(websocket):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    hub = websocket.app.state.hub
    await hub.join(session_id, websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info("WebSocket client disconnected")
                break
            # Binary frames carry no "text" and are answered as invalid
            await hub.handle_message(session_id, websocket, message.get("text"))
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected")
    finally:
        await hub.leave(session_id, websocket)
