"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``x`` grows to the right and ``y`` grows downward, matching canvas
    coordinates.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def opposite(direction: Direction) -> Direction:
    """Return the direction that exactly reverses *direction*."""
    return _OPPOSITES[direction]


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(self, cells: Iterable[tuple[int, int]]) -> None:
        self.body: deque[tuple[int, int]] = deque(cells)
        if not self.body:
            raise ValueError("Snake length must be at least 1.")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake segments must not overlap.")

    @classmethod
    def horizontal(
        cls, head_x: int, head_y: int, length: int = 3,
    ) -> Snake:
        """Build a snake lying left of its head, facing right."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        return cls((head_x - i, head_y) for i in range(length))

    @property
    def head(self) -> tuple[int, int]:
        """Return the head coordinate."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def next_head(self, direction: Direction) -> tuple[int, int]:
        """Compute the next head position without moving."""
        dx, dy = direction.value
        x, y = self.head
        return x + dx, y + dy

    def advance(
        self, new_head: tuple[int, int], grow: bool = False,
    ) -> tuple[int, int] | None:
        """Prepend *new_head* and drop the tail unless growing.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        if grow:
            return None
        return self.body.pop()

    def cells(self) -> tuple[tuple[int, int], ...]:
        """Return an immutable copy of the body, head first."""
        return tuple(self.body)
