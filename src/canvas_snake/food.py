"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from canvas_snake.grid import CellType

if TYPE_CHECKING:
    from canvas_snake.grid import Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Keeps the single food cell on the grid.

    Placement is rejection sampling over the whole board with a NumPy
    generator, so a seeded RNG gives reproducible food positions.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: tuple[int, int] | None = None

    def place(self) -> tuple[int, int] | None:
        """Move the food to a random empty grid cell.

        Returns the new position, or ``None`` when the snake fills the
        board and no empty cell exists.
        """
        self.clear()
        if self.grid.empty_count() == 0:
            logger.warning("Board is full; no cell left for food.")
            return None

        size = self.grid.size
        while True:
            x, y = (int(v) for v in self.rng.integers(0, size, size=2))
            if self.grid.get(x, y) == CellType.EMPTY:
                break

        self.grid.set(x, y, CellType.FOOD)
        self.position = (x, y)
        return self.position

    def clear(self) -> None:
        """Remove the current food from the grid, if any."""
        if self.position is None:
            return
        x, y = self.position
        if self.grid.get(x, y) == CellType.FOOD:
            self.grid.set(x, y, CellType.EMPTY)
        self.position = None
