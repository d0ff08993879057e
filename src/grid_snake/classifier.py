"""Pure classification of grid coordinates by occupant."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from grid_snake.grid import CellKind

if TYPE_CHECKING:
    from grid_snake.grid import Grid


class Occupant(enum.Enum):
    """What a snake would run into at a coordinate.

    ``WALL`` is never stored in the grid; it stands for any coordinate
    outside of it.
    """

    EMPTY = "empty"
    PLAYER = "player"
    FOOD = "food"
    WALL = "wall"


_KIND_TO_OCCUPANT: dict[CellKind, Occupant] = {
    CellKind.EMPTY: Occupant.EMPTY,
    CellKind.PLAYER: Occupant.PLAYER,
    CellKind.FOOD: Occupant.FOOD,
}


def occupant_of(kind: CellKind) -> Occupant:
    """Map a stored cell kind to its occupant."""
    return _KIND_TO_OCCUPANT[kind]


def classify(grid: Grid, row: int, col: int) -> Occupant:
    """Classify any coordinate, including ones outside the grid."""
    if not grid.in_bounds(row, col):
        return Occupant.WALL
    return occupant_of(grid.get(row, col))


def is_empty(grid: Grid, row: int, col: int) -> bool:
    return classify(grid, row, col) is Occupant.EMPTY


def is_player(grid: Grid, row: int, col: int) -> bool:
    return classify(grid, row, col) is Occupant.PLAYER


def is_food(grid: Grid, row: int, col: int) -> bool:
    return classify(grid, row, col) is Occupant.FOOD


def is_wall(grid: Grid, row: int, col: int) -> bool:
    return classify(grid, row, col) is Occupant.WALL
