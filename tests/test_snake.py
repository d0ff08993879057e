"""Tests for the Snake module."""

from grid_snake.movement import Direction
from grid_snake.snake import Snake


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake(5, 5)
        assert snake.head == (5, 5)
        assert len(snake.tail) == 0
        assert snake.length == 1
        assert snake.direction == Direction.RIGHT


class TestSnakeMovement:
    def test_advance_without_tail(self):
        snake = Snake(5, 5)
        vacated = snake.advance(5, 6)
        assert snake.head == (5, 6)
        assert vacated == (5, 5)
        assert len(snake.tail) == 0

    def test_advance_with_growth(self):
        snake = Snake(5, 5)
        vacated = snake.advance(5, 6, grow=True)
        assert vacated is None
        assert list(snake.tail) == [(5, 5)]

    def test_advance_shifts_tail(self):
        snake = Snake(5, 5)
        snake.tail.extend([(5, 4), (5, 3)])
        vacated = snake.advance(5, 6)
        assert snake.head == (5, 6)
        assert list(snake.tail) == [(5, 5), (5, 4)]
        assert vacated == (5, 3)

    def test_growth_keeps_far_end(self):
        snake = Snake(5, 5)
        snake.tail.extend([(5, 4), (5, 3)])
        snake.advance(5, 6, grow=True)
        assert list(snake.tail) == [(5, 5), (5, 4), (5, 3)]
        assert snake.length == 4


class TestSnakeQueries:
    def test_occupies(self):
        snake = Snake(5, 5)
        snake.tail.append((5, 4))
        assert snake.occupies(5, 5)
        assert snake.occupies(5, 4)
        assert not snake.occupies(0, 0)

    def test_segments(self):
        snake = Snake(1, 1)
        snake.tail.append((1, 0))
        assert snake.segments() == [(1, 1), (1, 0)]


class TestSnakeSerialization:
    def test_to_dict(self):
        snake = Snake(5, 5, Direction.UP)
        snake.tail.append((6, 5))
        d = snake.to_dict()
        assert d["head"] == [5, 5]
        assert d["tail"] == [[6, 5]]
        assert d["direction"] == "up"
        assert d["length"] == 2
