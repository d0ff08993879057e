"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.config import GameConfig
from grid_snake.server.models import (
    CreateSessionRequest,
    DirectionRequest,
    SessionSummary,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new round in the waiting state."""
    manager = _get_manager(request)
    try:
        config = GameConfig(
            board_size=body.board_size,
            cell_size=body.cell_size,
            tick_rate=body.tick_rate,
            seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return manager.create_session(config).summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List waiting and active sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the full round state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    return {
        "session_id": session.session_id,
        "status": session.status.value,
        "config": session.config.to_dict(),
        "state": session.controller.get_state(),
    }


@router.post("/{session_id}/start", status_code=200)
async def start_session(session_id: str, request: Request) -> dict:
    """Start ticking a waiting session."""
    manager = _get_manager(request)
    try:
        manager.start_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "started", "session_id": session_id}


@router.post("/{session_id}/direction")
async def set_direction(
    session_id: str, body: DirectionRequest, request: Request,
) -> dict:
    """Change direction for the next tick. Unknown directions are ignored."""
    manager = _get_manager(request)
    try:
        accepted = await manager.set_direction(session_id, body.direction)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"accepted": accepted}
