"""Grid representation for the snake simulation."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from typing import NamedTuple

import numpy as np

MIN_GRID_SIZE = 4


class CellKind(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    PLAYER = 1
    FOOD = 2


class Cell(NamedTuple):
    """Read-only snapshot of one grid position."""

    row: int
    col: int
    kind: CellKind


class Grid:
    """Square NumPy-backed arena of cells.

    The grid is the single owner of cell state. Everything else refers to
    cells by ``(row, col)`` index and mutates them through :meth:`set`.
    """

    def __init__(self, size: int = 40) -> None:
        if size < MIN_GRID_SIZE:
            raise ValueError(
                f"Grid size must be at least {MIN_GRID_SIZE}×{MIN_GRID_SIZE}."
            )
        self.size = size
        self.cells_array = np.zeros((size, size), dtype=np.int8)

    @classmethod
    def from_board(cls, board_size: int, cell_size: int) -> Grid:
        """Build a grid fitting *board_size* pixels split into *cell_size* cells."""
        return cls(board_size // cell_size)

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> CellKind:
        """Return the cell kind at the given coordinate."""
        return CellKind(self.cells_array[row, col])

    def set(self, row: int, col: int, kind: CellKind) -> None:
        """Set the cell kind at the given coordinate."""
        self.cells_array[row, col] = kind

    def cell(self, row: int, col: int) -> Cell:
        """Return a snapshot of the cell at the given coordinate."""
        return Cell(row, col, self.get(row, col))

    def cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                yield self.cell(row, col)

    def positions_of(self, kind: CellKind) -> list[tuple[int, int]]:
        """Return coordinates of all cells of *kind*, row-major."""
        rows, cols = np.where(self.cells_array == kind)
        return list(zip(rows.tolist(), cols.tolist(), strict=True))

    def empty_cells(self) -> list[tuple[int, int]]:
        """Return a list of all empty cell coordinates."""
        return self.positions_of(CellKind.EMPTY)

    def count(self, kind: CellKind) -> int:
        return int(np.count_nonzero(self.cells_array == kind))

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary."""
        return {
            "size": self.size,
            "cells": self.cells_array.tolist(),
        }
