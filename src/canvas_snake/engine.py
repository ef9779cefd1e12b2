"""Step-based game engine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from canvas_snake.food import FoodSpawner
from canvas_snake.grid import CellType, Grid
from canvas_snake.snake import Direction, Snake, opposite

logger = logging.getLogger(__name__)

# The start snake lies left of this head, near the centre-left.
START_HEAD = (6, 6)
START_LENGTH = 3
FOOD_POINTS = 10


class GameStatus(str, enum.Enum):
    """Lifecycle states of the engine."""

    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game handed to renderers."""

    snake: tuple[tuple[int, int], ...]
    food: tuple[int, int] | None
    score: int
    status: GameStatus
    direction: Direction
    grid_size: int
    tick: int
    won: bool = False

    @property
    def head(self) -> tuple[int, int]:
        return self.snake[0]

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict of the snapshot."""
        return {
            "tick": self.tick,
            "score": self.score,
            "status": self.status.value,
            "won": self.won,
            "grid_size": self.grid_size,
            "direction": self.direction.name.lower(),
            "snake": [list(cell) for cell in self.snake],
            "food": list(self.food) if self.food is not None else None,
        }


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns the grid, snake, and food spawner. :meth:`reset`
    starts an episode, each call to :meth:`step` advances it by exactly one
    cell, and :meth:`snapshot` exposes the result without giving access to
    the mutable internals.
    """

    def __init__(self, grid_size: int = 30, seed: int | None = None) -> None:
        self.rng = np.random.default_rng(seed)
        self.status = GameStatus.READY
        self._layout(grid_size)

    @property
    def grid_size(self) -> int:
        return self.grid.size

    @property
    def pending_direction(self) -> Direction | None:
        return self._pending_direction

    def _layout(self, grid_size: int) -> None:
        self.grid = Grid(grid_size)
        self.snake = Snake.horizontal(*START_HEAD, length=START_LENGTH)
        for x, y in self.snake.body:
            self.grid.set(x, y, CellType.SNAKE)

        self.food = FoodSpawner(self.grid, rng=self.rng)
        self.food.place()

        self.direction = Direction.RIGHT
        self._pending_direction: Direction | None = None
        self.score = 0
        self.tick = 0
        self.won = False

    def reset(self, grid_size: int | None = None) -> Snapshot:
        """Start a fresh episode on a board of *grid_size* cells per side."""
        self._layout(grid_size if grid_size is not None else self.grid.size)
        self.status = GameStatus.RUNNING
        logger.debug(
            "Engine reset on a %dx%d grid.", self.grid.size, self.grid.size,
        )
        return self.snapshot()

    def set_direction(self, direction: Direction) -> None:
        """Queue a turn for the next step, ignoring 180° reversals."""
        if opposite(direction) == self.direction:
            return
        self._pending_direction = direction

    def step(self) -> Snapshot:
        """Advance the game by one tick.

        Returns the resulting snapshot. Does nothing unless the game is
        running.
        """
        if self.status != GameStatus.RUNNING:
            return self.snapshot()

        if self._pending_direction is not None:
            self.direction = self._pending_direction
            self._pending_direction = None

        next_x, next_y = self.snake.next_head(self.direction)

        # The pre-move body is checked in full, tail included.
        if (
            not self.grid.in_bounds(next_x, next_y)
            or self.grid.get(next_x, next_y) == CellType.SNAKE
        ):
            self._end_game()
            return self.snapshot()

        will_grow = self.grid.get(next_x, next_y) == CellType.FOOD
        vacated = self.snake.advance((next_x, next_y), grow=will_grow)
        self.grid.set(next_x, next_y, CellType.SNAKE)
        if vacated is not None:
            self.grid.set(vacated[0], vacated[1], CellType.EMPTY)
        self.tick += 1

        if will_grow:
            self.score += FOOD_POINTS
            if self.food.place() is None:
                self.won = True
                self._end_game()

        return self.snapshot()

    def pause(self) -> None:
        """Suspend a running game without touching its state."""
        if self.status != GameStatus.RUNNING:
            raise ValueError("Only a running game can be paused.")
        self.status = GameStatus.PAUSED

    def resume(self) -> None:
        """Continue a paused game."""
        if self.status != GameStatus.PAUSED:
            raise ValueError("Only a paused game can be resumed.")
        self.status = GameStatus.RUNNING

    def end(self) -> None:
        """Finish the episode early, e.g. when its result cannot be saved."""
        if self.status != GameStatus.GAME_OVER:
            self._end_game()

    def snapshot(self) -> Snapshot:
        """Return an immutable view of the current state."""
        return Snapshot(
            snake=self.snake.cells(),
            food=self.food.position,
            score=self.score,
            status=self.status,
            direction=self.direction,
            grid_size=self.grid.size,
            tick=self.tick,
            won=self.won,
        )

    def _end_game(self) -> None:
        """Mark the episode as finished."""
        self.status = GameStatus.GAME_OVER
        logger.info(
            "Game over at tick %d with score %d%s.",
            self.tick, self.score, " (board cleared)" if self.won else "",
        )
