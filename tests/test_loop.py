"""Tests for the fixed-cadence game loop."""

from __future__ import annotations

import asyncio

import numpy as np
import pytest

from grid_snake.config import GameConfig
from grid_snake.controller import RoundState, SnakeController
from grid_snake.food import FoodSpawner
from grid_snake.grid import Grid
from grid_snake.loop import GameLoop
from grid_snake.movement import Direction
from grid_snake.snake import Snake


def _bare_controller() -> SnakeController:
    """5x5 board, head at (2, 2) heading right, no food."""
    grid = Grid(5)
    return SnakeController(
        grid, Snake(2, 2, Direction.RIGHT),
        FoodSpawner(grid, rng=np.random.default_rng(0)),
    )


class TestGameLoopRun:
    async def test_runs_until_crash(self):
        frames: list[dict] = []

        async def renderer(state: dict) -> None:
            frames.append(state)

        loop = GameLoop(_bare_controller(), renderer, tick_interval=0.001)
        final = await loop.run()

        assert final is RoundState.CRASHED
        assert loop.ticks_run == 3
        assert [f["snake"]["head"] for f in frames] == [[2, 3], [2, 4], [2, 4]]
        assert frames[-1]["round_state"] == "crashed"
        assert frames[-1]["crash_reason"] == "wall"

    async def test_max_ticks(self):
        controller = SnakeController.new_round(GameConfig(seed=1))
        loop = GameLoop(controller, tick_interval=0.001, max_ticks=4)
        final = await loop.run()
        assert final is RoundState.RUNNING
        assert controller.tick_count == 4

    async def test_direction_change_between_ticks(self):
        controller = _bare_controller()
        loop = GameLoop(controller, tick_interval=0.001)
        await loop.tick_once()
        controller.set_direction(Direction.DOWN)
        await loop.tick_once()
        assert controller.snake.head == (3, 3)

    def test_invalid_interval(self):
        with pytest.raises(ValueError, match="positive"):
            GameLoop(_bare_controller(), tick_interval=0)


class TestGameLoopReentrancy:
    async def test_overlapping_tick_is_skipped(self):
        release = asyncio.Event()

        async def slow_renderer(state: dict) -> None:
            await release.wait()

        controller = _bare_controller()
        loop = GameLoop(controller, slow_renderer, tick_interval=0.001)

        first = asyncio.create_task(loop.tick_once())
        await asyncio.sleep(0)
        assert await loop.tick_once() is None
        assert loop.skipped_ticks == 1

        release.set()
        result = await first
        assert result is not None
        assert controller.tick_count == 1


class TestGameLoopLifecycle:
    async def test_start_and_stop(self):
        controller = SnakeController.new_round(GameConfig(seed=2))
        loop = GameLoop(controller, tick_interval=10.0)
        loop.start()
        assert loop.running
        with pytest.raises(ValueError, match="already running"):
            loop.start()
        await loop.stop()
        assert not loop.running
        assert controller.tick_count == 0

    async def test_stop_without_start(self):
        loop = GameLoop(_bare_controller())
        await loop.stop()
        assert not loop.running
