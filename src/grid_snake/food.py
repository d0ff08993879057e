"""Food spawning logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.grid import CellKind

if TYPE_CHECKING:
    from grid_snake.grid import Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food on a uniformly random empty cell.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Callers are responsible for only spawning when no food is on the grid.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.spawn_count = 0

    def spawn(self) -> bool:
        """Mark one empty cell as food. Returns False if there is no room."""
        empty = self.grid.empty_cells()
        if not empty:
            logger.debug("No empty cells available for food spawning.")
            return False

        row, col = empty[int(self.rng.integers(len(empty)))]
        self.grid.set(row, col, CellKind.FOOD)
        self.spawn_count += 1
        logger.debug("Food spawned at (%d, %d).", row, col)
        return True

    def position(self) -> tuple[int, int] | None:
        """Return the current food coordinate, if any."""
        found = self.grid.positions_of(CellKind.FOOD)
        return found[0] if found else None
