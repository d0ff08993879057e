"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a session."""

    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    board_size: int = Field(default=400, ge=4)
    cell_size: int = Field(default=10, ge=1)
    tick_rate: float = Field(default=10.0, gt=0, le=100)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: str


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    grid_size: int
    tick_rate: float
    round_state: str
