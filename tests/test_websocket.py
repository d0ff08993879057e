"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from grid_snake.server.app import create_app


@pytest.fixture()
def tc():
    """TestClient used as a context manager so the lifespan runs and every
    request and socket shares one event loop."""
    with TestClient(create_app()) as client:
        yield client


def _create_session(tc, start=False, **body):
    resp = tc.post("/sessions", json=body)
    assert resp.status_code == 201
    session_id = resp.json()["session_id"]
    if start:
        assert tc.post(f"/sessions/{session_id}/start").status_code == 200
    return session_id


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        session_id = _create_session(tc, seed=1)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["tick"] == 0
            assert state["round_state"] == "running"
            assert state["grid"]["size"] == 40

    def test_direction_reaches_controller(self, tc):
        session_id = _create_session(tc, start=True, seed=2, tick_rate=20)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "down"}))
            directions = []
            for _ in range(10):
                state = json.loads(ws.receive_text())
                directions.append(state["snake"]["direction"])
                if directions[-1] == "down":
                    break
            assert directions[-1] == "down"

    def test_frames_stream_each_tick(self, tc):
        session_id = _create_session(tc, start=True, seed=3, tick_rate=50)

        with tc.websocket_connect(f"/sessions/{session_id}/spectate") as ws:
            ws.receive_text()
            ticks = [json.loads(ws.receive_text())["tick"] for _ in range(3)]
            assert ticks == sorted(ticks)
            assert ticks[0] >= 1

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ):
            pass

    def test_invalid_messages_ignored(self, tc):
        session_id = _create_session(tc, seed=4)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text("123")
            ws.send_text(json.dumps({"direction": "sideways"}))
            ws.send_text(json.dumps({"direction": 7}))
            ws.send_text(json.dumps({"no_direction_key": True}))

        resp = tc.get(f"/sessions/{session_id}")
        assert resp.json()["state"]["snake"]["direction"] == "right"


class TestSpectateWebSocket:
    def test_spectator_receives_initial_state(self, tc):
        session_id = _create_session(tc, seed=5)

        with tc.websocket_connect(f"/sessions/{session_id}/spectate") as ws:
            state = json.loads(ws.receive_text())
            assert "grid" in state
            assert "snake" in state

    def test_spectate_nonexistent_session(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/spectate",
        ):
            pass


class TestDisconnectHandling:
    def test_client_removed_on_disconnect(self, tc):
        session_id = _create_session(tc, seed=6)
        session = tc.app.state.session_manager.get_session(session_id)

        with tc.websocket_connect(f"/sessions/{session_id}/spectate") as ws:
            ws.receive_text()
            assert len(session.clients) == 1

        resp = tc.get(f"/sessions/{session_id}")
        assert resp.status_code == 200
        assert session.clients == []
