"""Grid Snake: movement and collision core."""

from grid_snake.classifier import Occupant
from grid_snake.config import GameConfig
from grid_snake.controller import (
    CrashReason,
    RoundState,
    SnakeController,
    TickOutcome,
    TickResult,
)
from grid_snake.food import FoodSpawner
from grid_snake.grid import Cell, CellKind, Grid
from grid_snake.loop import GameLoop
from grid_snake.movement import Direction, MoveResult, resolve
from grid_snake.snake import Snake

__all__ = [
    "Cell",
    "CellKind",
    "CrashReason",
    "Direction",
    "FoodSpawner",
    "GameConfig",
    "GameLoop",
    "Grid",
    "MoveResult",
    "Occupant",
    "RoundState",
    "Snake",
    "SnakeController",
    "TickOutcome",
    "TickResult",
    "resolve",
]
