"""WebSocket handlers for real-time play and spectating."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.server.models import SessionStatus
from grid_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _frame(state: dict) -> str:
    return json.dumps(state, separators=(",", ":"))


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send directions, receive round state each tick."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    logger.info("Player connected to session %s.", session_id)

    # Send an initial frame so the client can draw before the first tick.
    await websocket.send_text(_frame(session.controller.get_state()))
    session.clients.append(websocket)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue

            direction = msg.get("direction")
            if not isinstance(direction, str):
                continue

            if session.status != SessionStatus.FINISHED:
                await manager.set_direction(session_id, direction)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        if websocket in session.clients:
            session.clients.remove(websocket)


@ws_router.websocket("/sessions/{session_id}/spectate")
async def spectate(websocket: WebSocket, session_id: str) -> None:
    """Spectator WebSocket: receive-only round state stream."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    logger.info("Spectator connected to session %s.", session_id)

    await websocket.send_text(_frame(session.controller.get_state()))
    session.clients.append(websocket)

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from session %s.", session_id)
    finally:
        if websocket in session.clients:
            session.clients.remove(websocket)
