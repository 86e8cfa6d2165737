"""Real-time session room tests — WebSocket relay through the TestClient.

Test scenarios:
  - Second participant joining is announced to the first
  - session_event frames are relayed to the other members, not the sender
  - analysis_request is answered to every member with scores + analysis
  - Malformed, binary or unknown frames get an error reply
  - HTTP-posted events reach connected members
  - Token required on the socket when an API token is configured
"""

import json

import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from screening_server.app import create_app
from screening_server.config import ServerSettings
from screening_server.realtime import build_analysis_message

from screening_core.errors import ReportValidationError

WS_URL = "/ws/sessions/s1"


@pytest.fixture
def client():
    with TestClient(create_app(ServerSettings())) as c:
        yield c


class TestRoom:

    def test_join_announced(self, client):
        with client.websocket_connect(WS_URL) as first:
            with client.websocket_connect(WS_URL):
                msg = first.receive_json()
                assert msg["type"] == "participant_joined"
                assert msg["participants"] == 2
                assert msg["sessionId"] == "s1"

    def test_session_event_relayed(self, client):
        with client.websocket_connect(WS_URL) as first:
            with client.websocket_connect(WS_URL) as second:
                first.receive_json()  # participant_joined

                second.send_text(json.dumps({
                    "type": "session_event",
                    "event": "trial_completed",
                    "data": {"test": "emotion", "isCorrect": True},
                }))
                msg = first.receive_json()

                assert msg["type"] == "session_event"
                assert msg["event"] == "trial_completed"
                assert msg["data"]["isCorrect"] is True
                assert msg["sessionId"] == "s1"
                assert "receivedAt" in msg

    def test_analysis_request_broadcast(self, client, raw_results):
        with client.websocket_connect(WS_URL) as first:
            with client.websocket_connect(WS_URL) as second:
                first.receive_json()  # participant_joined

                second.send_text(json.dumps({
                    "type": "analysis_request",
                    "testResults": raw_results,
                }))
                to_first = first.receive_json()
                to_second = second.receive_json()

                for msg in (to_first, to_second):
                    assert msg["type"] == "analysis"
                    assert msg["scores"]["reactionScore"] == 383
                    assert msg["analysis"]["summary"]

    def test_invalid_frame(self, client):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_text("not json")
            assert ws.receive_json() == {"type": "error", "detail": "Invalid message"}

    def test_binary_frame(self, client):
        """A binary frame gets an error reply and the socket stays usable."""
        with client.websocket_connect(WS_URL) as ws:
            ws.send_bytes(b"\x00\x01")
            assert ws.receive_json() == {"type": "error", "detail": "Invalid message"}

            ws.send_text(json.dumps({"type": "dance"}))
            assert ws.receive_json()["detail"] == "Unknown message type"

    def test_unknown_type(self, client):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_text(json.dumps({"type": "dance"}))
            assert ws.receive_json() == {"type": "error", "detail": "Unknown message type"}

    def test_bad_analysis_request(self, client):
        with client.websocket_connect(WS_URL) as ws:
            ws.send_text(json.dumps({"type": "analysis_request"}))
            assert ws.receive_json() == {"type": "error", "detail": "Missing required data"}

    def test_http_event_reaches_room(self, client):
        with client.websocket_connect(WS_URL) as ws:
            resp = client.post(
                "/api/v1/sessions/s1/events",
                json={"event": "game_started", "data": {"test": "pattern"}},
            )
            assert resp.status_code == 202
            assert resp.json() == {"delivered": 1}

            msg = ws.receive_json()
            assert msg["event"] == "game_started"
            assert msg["data"] == {"test": "pattern"}

    def test_rooms_are_isolated(self, client):
        with client.websocket_connect("/ws/sessions/other"):
            resp = client.post("/api/v1/sessions/s1/events", json={"event": "x"})
            assert resp.json() == {"delivered": 0}


class TestSocketAuth:

    def test_token_required(self):
        app = create_app(ServerSettings(api_auth_token="s3cret"))
        with TestClient(app) as c:
            with pytest.raises(WebSocketDisconnect) as exc_info:
                with c.websocket_connect(WS_URL):
                    pass
            assert exc_info.value.code == 1008

    def test_token_accepted(self):
        app = create_app(ServerSettings(api_auth_token="s3cret"))
        with TestClient(app) as c:
            with c.websocket_connect(WS_URL + "?token=s3cret") as ws:
                ws.send_text(json.dumps({"type": "dance"}))
                assert ws.receive_json()["type"] == "error"


class TestBuildAnalysisMessage:

    def test_missing_results(self):
        with pytest.raises(ReportValidationError):
            build_analysis_message("s1", None)

    def test_invalid_results(self):
        with pytest.raises(ReportValidationError):
            build_analysis_message("s1", {"emotionTest": [{"isCorrect": "maybe"}]})

    def test_message_shape(self, raw_results):
        msg = build_analysis_message("s1", raw_results)
        assert set(msg) == {
            "type", "sessionId", "scores", "interpretations", "analysis", "generatedAt",
        }
