"""Snake representation as grid indices."""

from __future__ import annotations

from collections import deque

from grid_snake.movement import Direction


class Snake:
    """A head coordinate plus an ordered deque of tail coordinates.

    ``tail[0]`` is the segment nearest the head; ``tail[-1]`` is the far end.
    The snake holds indices only; cell kinds live in the grid.
    """

    def __init__(
        self,
        head_row: int,
        head_col: int,
        direction: Direction = Direction.RIGHT,
    ) -> None:
        self.head: tuple[int, int] = (head_row, head_col)
        self.tail: deque[tuple[int, int]] = deque()
        self.direction = direction

    @property
    def length(self) -> int:
        """Head plus tail segments."""
        return 1 + len(self.tail)

    def segments(self) -> list[tuple[int, int]]:
        """Return head followed by tail, nearest first."""
        return [self.head, *self.tail]

    def advance(self, row: int, col: int, grow: bool = False) -> tuple[int, int] | None:
        """Move the head to ``(row, col)``.

        The old head becomes the first tail segment. Returns the vacated
        cell, or ``None`` if the snake grew.
        """
        self.tail.appendleft(self.head)
        self.head = (row, col)
        if grow:
            return None
        return self.tail.pop()

    def occupies(self, row: int, col: int) -> bool:
        """Check whether the snake occupies a given cell."""
        return (row, col) == self.head or (row, col) in self.tail

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "head": list(self.head),
            "tail": [list(seg) for seg in self.tail],
            "direction": self.direction.label,
            "length": self.length,
        }
