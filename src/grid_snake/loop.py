"""Fixed-cadence asyncio ticker driving a controller."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from grid_snake.controller import RoundState, SnakeController, TickResult

logger = logging.getLogger(__name__)

Renderer = Callable[[dict], Awaitable[None]]


class GameLoop:
    """Calls :meth:`SnakeController.tick` at a fixed rate.

    After every tick the serialized state is handed to *renderer*. Only one
    tick runs at a time: a tick requested while another is still in flight
    (for example while a slow renderer is awaited) is skipped and counted in
    :attr:`skipped_ticks`. The loop ends on its own once the round crashes.
    """

    def __init__(
        self,
        controller: SnakeController,
        renderer: Renderer | None = None,
        tick_interval: float = 0.1,
        max_ticks: int | None = None,
        lock: asyncio.Lock | None = None,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError("tick_interval must be positive.")
        self.controller = controller
        self.renderer = renderer
        self.tick_interval = tick_interval
        self.max_ticks = max_ticks
        self.lock = lock if lock is not None else asyncio.Lock()
        self.ticks_run = 0
        self.skipped_ticks = 0
        self._busy = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick_once(self) -> TickResult | None:
        """Run one tick and render it. Returns None if a tick was in flight."""
        if self._busy:
            self.skipped_ticks += 1
            logger.debug("Skipped re-entrant tick (%d so far).", self.skipped_ticks)
            return None

        self._busy = True
        try:
            async with self.lock:
                result = self.controller.tick()
                state = self.controller.get_state()
            self.ticks_run += 1
            if self.renderer is not None:
                await self.renderer(state)
        finally:
            self._busy = False
        return result

    async def run(self) -> RoundState:
        """Tick until the round crashes or *max_ticks* is reached."""
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while not self.controller.crashed:
            if self.max_ticks is not None and self.ticks_run >= self.max_ticks:
                break
            # Schedule against absolute deadlines so slow ticks do not drift.
            deadline += self.tick_interval
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            await self.tick_once()
        return self.controller.round_state

    def start(self) -> asyncio.Task:
        """Run the loop as a background task."""
        if self.running:
            raise ValueError("Loop is already running.")
        self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self) -> None:
        """Cancel the background task, if any, and wait for it to end."""
        if self._task is None or self._task.done():
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            logger.info("Game loop stopped after %d ticks.", self.ticks_run)
