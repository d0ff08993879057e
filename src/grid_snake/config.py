"""Round configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from grid_snake.grid import MIN_GRID_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Board geometry, tick cadence, and RNG seed for one round.

    Supports JSON serialization for reproducibility.
    """

    board_size: int = 400
    cell_size: int = 10
    tick_rate: float = 10.0
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if self.tick_rate <= 0:
            raise ValueError("tick_rate must be positive.")
        if self.grid_size < MIN_GRID_SIZE:
            raise ValueError(
                f"board_size // cell_size must be at least {MIN_GRID_SIZE}."
            )

    @property
    def grid_size(self) -> int:
        """Cells per side."""
        return self.board_size // self.cell_size

    @property
    def tick_interval(self) -> float:
        """Seconds between ticks."""
        return 1.0 / self.tick_rate

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
