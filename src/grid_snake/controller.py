"""Tick-based movement state machine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from grid_snake.classifier import Occupant
from grid_snake.config import GameConfig
from grid_snake.food import FoodSpawner
from grid_snake.grid import CellKind, Grid
from grid_snake.movement import Direction, resolve
from grid_snake.snake import Snake

logger = logging.getLogger(__name__)


class RoundState(str, enum.Enum):
    """Whether the round still accepts ticks."""

    RUNNING = "running"
    CRASHED = "crashed"


class CrashReason(str, enum.Enum):
    WALL = "wall"
    SELF = "self"


class TickOutcome(enum.Enum):
    """What a single call to :meth:`SnakeController.tick` did."""

    MOVED = "moved"
    GREW = "grew"
    CRASHED = "crashed"
    HALTED = "halted"


@dataclass(frozen=True)
class TickResult:
    outcome: TickOutcome
    head: tuple[int, int]
    food_spawned: bool = False
    crash_reason: CrashReason | None = None


class SnakeController:
    """Single-snake, tick-based movement state machine.

    The controller owns the grid, the snake, and the food spawner. Each
    call to :meth:`tick` advances the round by one cell. Wall and self
    collisions move the round to :attr:`RoundState.CRASHED`; after that
    ticks are no-ops.

    ``direction`` is written by the input side at any time and read once
    at the start of each tick. Only the last write before a tick counts.
    Reversing straight into the neck is allowed and crashes the round.
    """

    def __init__(
        self,
        grid: Grid,
        snake: Snake,
        food_spawner: FoodSpawner | None = None,
    ) -> None:
        self.grid = grid
        self.snake = snake
        self.food_spawner = (
            food_spawner if food_spawner is not None else FoodSpawner(grid)
        )
        self.direction: Direction = snake.direction
        self.round_state = RoundState.RUNNING
        self.crash_reason: CrashReason | None = None
        self.tick_count = 0
        self.food_eaten = 0

        # Paint the snake onto the grid.
        for r, c in snake.segments():
            self.grid.set(r, c, CellKind.PLAYER)

    @classmethod
    def new_round(
        cls,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> SnakeController:
        """Create a fresh round: empty grid, random interior head, one food."""
        config = config if config is not None else GameConfig()
        rng = rng if rng is not None else np.random.default_rng(config.seed)
        grid = Grid.from_board(config.board_size, config.cell_size)

        # Keep the head away from the walls on the first ticks.
        low, high = grid.size // 4, (3 * grid.size) // 4
        head_row = int(rng.integers(low, high))
        head_col = int(rng.integers(low, high))
        snake = Snake(head_row, head_col, Direction.RIGHT)

        controller = cls(grid, snake, FoodSpawner(grid, rng=rng))
        controller.food_spawner.spawn()
        logger.info(
            "Round created on %dx%d grid with head at (%d, %d).",
            grid.size, grid.size, head_row, head_col,
        )
        return controller

    @property
    def crashed(self) -> bool:
        return self.round_state is RoundState.CRASHED

    def set_direction(self, value: Direction | str) -> bool:
        """Set the direction for the next tick.

        Accepts a :class:`Direction` or its name. Unrecognised input is
        ignored and the previous direction kept. Returns whether the value
        was accepted.
        """
        direction = Direction.parse(value)
        if direction is None:
            logger.debug("Ignoring unrecognised direction %r.", value)
            return False
        self.direction = direction
        return True

    def tick(self) -> TickResult:
        """Advance the round by one cell."""
        if self.crashed:
            return TickResult(TickOutcome.HALTED, self.snake.head)

        direction = self.direction
        self.snake.direction = direction
        head_row, head_col = self.snake.head
        move = resolve(self.grid, head_row, head_col, direction)
        self.tick_count += 1

        occupant = move.occupant
        if occupant is Occupant.WALL:
            return self._crash(CrashReason.WALL)
        if occupant is Occupant.PLAYER:
            return self._crash(CrashReason.SELF)
        if occupant is Occupant.EMPTY:
            vacated = self.snake.advance(move.row, move.col)
            self.grid.set(move.row, move.col, CellKind.PLAYER)
            self.grid.set(vacated[0], vacated[1], CellKind.EMPTY)
            return TickResult(TickOutcome.MOVED, self.snake.head)

        # Occupant.FOOD: the far tail end stays, so the snake grows by one.
        self.snake.advance(move.row, move.col, grow=True)
        self.grid.set(move.row, move.col, CellKind.PLAYER)
        self.food_eaten += 1
        spawned = self.food_spawner.spawn()
        logger.debug(
            "Food eaten at (%d, %d); length now %d.",
            move.row, move.col, self.snake.length,
        )
        return TickResult(
            TickOutcome.GREW, self.snake.head, food_spawned=spawned,
        )

    def get_state(self) -> dict:
        """Return the full, serializable round state."""
        food = self.food_spawner.position()
        return {
            "tick": self.tick_count,
            "round_state": self.round_state.value,
            "crash_reason": (
                self.crash_reason.value if self.crash_reason else None
            ),
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "food": list(food) if food is not None else None,
        }

    def _crash(self, reason: CrashReason) -> TickResult:
        """Mark the round as crashed. The grid is left untouched."""
        self.round_state = RoundState.CRASHED
        self.crash_reason = reason
        logger.info(
            "Snake crashed into %s at tick %d with length %d.",
            reason.value, self.tick_count, self.snake.length,
        )
        return TickResult(
            TickOutcome.CRASHED, self.snake.head, crash_reason=reason,
        )
