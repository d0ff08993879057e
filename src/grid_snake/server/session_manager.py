"""In-memory session registry, lifecycle management, and tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import GameConfig
from grid_snake.controller import SnakeController
from grid_snake.loop import GameLoop
from grid_snake.movement import Direction
from grid_snake.server.models import SessionStatus, SessionSummary

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100


@dataclass
class Session:
    """All state for a single round served over the API."""

    session_id: str
    config: GameConfig
    controller: SnakeController
    status: SessionStatus = SessionStatus.WAITING
    clients: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    loop: GameLoop | None = field(default=None, repr=False)
    _task: asyncio.Task | None = field(default=None, repr=False)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            grid_size=self.controller.grid.size,
            tick_rate=self.config.tick_rate,
            round_state=self.controller.round_state.value,
        )


class SessionManager:
    """Central registry managing all sessions."""

    def __init__(
        self, max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self._sessions: dict[str, Session] = {}
        self._max_finished_sessions = max_finished_sessions

    def create_session(self, config: GameConfig | None = None) -> Session:
        """Set up a new round and register it in the waiting state."""
        config = config if config is not None else GameConfig()
        session_id = uuid.uuid4().hex[:12]
        session = Session(
            session_id=session_id,
            config=config,
            controller=SnakeController.new_round(config),
        )
        self._sessions[session_id] = session
        logger.info(
            "Session %s created (grid=%d).", session_id, config.grid_size,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of non-finished sessions."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status != SessionStatus.FINISHED
        ]

    def start_session(self, session_id: str) -> None:
        """Start the tick loop for a waiting session."""
        session = self._require(session_id)
        if session.status != SessionStatus.WAITING:
            raise ValueError("Session is not in waiting state.")

        session.loop = GameLoop(
            session.controller,
            renderer=lambda state: self._broadcast(session, state),
            tick_interval=session.config.tick_interval,
            lock=session.lock,
        )
        session.status = SessionStatus.ACTIVE
        session._task = asyncio.create_task(self._run_loop(session))
        logger.info("Session %s started.", session_id)

    async def set_direction(
        self, session_id: str, value: Direction | str,
    ) -> bool:
        """Forward a direction change. Returns False if it was ignored."""
        session = self._require(session_id)
        if session.status == SessionStatus.FINISHED:
            return False
        async with session.lock:
            return session.controller.set_direction(value)

    def _require(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        return session

    async def _run_loop(self, session: Session) -> None:
        """Drive the session's game loop until the round crashes."""
        assert session.loop is not None  # noqa: S101
        try:
            await session.loop.run()
            self._mark_finished(session)
            logger.info(
                "Session %s finished after %d ticks.",
                session.session_id, session.controller.tick_count,
            )
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.session_id)
            self._mark_finished(session)
        finally:
            if session.status == SessionStatus.FINISHED:
                await self._close_connections(session)
                self._prune_finished_sessions()

    def _mark_finished(self, session: Session) -> None:
        """Transition a session to finished exactly once."""
        if session.status != SessionStatus.FINISHED:
            session.status = SessionStatus.FINISHED
            session.finished_at = time.monotonic()

    async def _close_connections(self, session: Session) -> None:
        """Close any live sockets for a finished session."""
        for ws in list(session.clients):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Round finished.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.clients.clear()

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [
            s for s in self._sessions.values()
            if s.status == SessionStatus.FINISHED
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def _broadcast(self, session: Session, state: dict) -> None:
        """Send round state to every connected client."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.clients):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.clients:
                session.clients.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all running tick loops."""
        tasks = [
            s._task for s in self._sessions.values()
            if s._task and not s._task.done()
        ]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
