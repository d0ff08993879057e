"""Directions and one-step move resolution."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

from grid_snake.classifier import Occupant, occupant_of
from grid_snake.grid import CellKind

if TYPE_CHECKING:
    from grid_snake.grid import Cell, Grid


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values."""

    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: object) -> Direction | None:
        """Coerce a ``Direction`` or case-insensitive name, else None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return _NAMES.get(value.strip().lower())
        return None


_NAMES: dict[str, Direction] = {d.label: d for d in Direction}

# Browser arrow-key codes.
KEY_CODES: dict[int, Direction] = {
    37: Direction.LEFT,
    38: Direction.UP,
    39: Direction.RIGHT,
    40: Direction.DOWN,
}


def direction_from_key(code: int) -> Direction | None:
    """Map an arrow-key code to a direction; other keys map to None."""
    return KEY_CODES.get(code)


@dataclass(frozen=True)
class MoveResult:
    """Outcome of looking one step ahead from the head.

    ``cell`` is None when the target lies outside the grid (a wall).
    ``collided`` is True for walls and for any non-empty cell.
    """

    row: int
    col: int
    cell: Cell | None
    collided: bool

    @property
    def wall(self) -> bool:
        return self.cell is None

    @property
    def occupant(self) -> Occupant:
        if self.cell is None:
            return Occupant.WALL
        return occupant_of(self.cell.kind)


def target_of(row: int, col: int, direction: Direction) -> tuple[int, int]:
    """Offset a coordinate by one unit in *direction*."""
    dr, dc = direction.value
    return row + dr, col + dc


def resolve(
    grid: Grid, head_row: int, head_col: int, direction: Direction,
) -> MoveResult:
    """Look up what lies one step from the head. Never mutates the grid."""
    to_row, to_col = target_of(head_row, head_col, direction)
    if not grid.in_bounds(to_row, to_col):
        return MoveResult(to_row, to_col, cell=None, collided=True)

    cell = grid.cell(to_row, to_col)
    return MoveResult(
        to_row, to_col, cell=cell, collided=cell.kind != CellKind.EMPTY,
    )
