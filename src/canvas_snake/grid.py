"""Grid representation and canvas sizing for the snake board."""

from __future__ import annotations

import enum

import numpy as np

# The start snake spans x in [4, 6] on row 6 and needs a free cell ahead.
MIN_GRID_SIZE = 8


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


def canvas_size_for(
    viewport_width: int, margin: int = 40, max_size: int = 600,
) -> int:
    """Return the square canvas edge that fits a viewport of this width."""
    return max(0, min(viewport_width - margin, max_size))


def grid_size_for(canvas_size: int, cell_size: int) -> int:
    """Return the number of whole cells per side of the canvas."""
    if cell_size < 1:
        raise ValueError("cell_size must be at least 1.")
    return canvas_size // cell_size


class Grid:
    """NumPy-backed square board.

    Cells are indexed as ``cells[y, x]`` so the array prints the way the
    board is drawn. Coordinates passed to the public methods are (x, y).
    """

    def __init__(self, size: int = 30) -> None:
        if size < MIN_GRID_SIZE:
            raise ValueError(
                f"Grid size must be at least {MIN_GRID_SIZE}, got {size}.",
            )
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int8)

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> CellType:
        """Return the cell type at the given coordinate."""
        return CellType(self.cells[y, x])

    def set(self, x: int, y: int, cell_type: CellType) -> None:
        """Set the cell type at the given coordinate."""
        self.cells[y, x] = cell_type

    def count(self, cell_type: CellType) -> int:
        """Return how many cells currently hold *cell_type*."""
        return int(np.count_nonzero(self.cells == cell_type))

    def empty_count(self) -> int:
        """Return how many cells hold neither snake nor food."""
        return self.count(CellType.EMPTY)

    @property
    def area(self) -> int:
        return self.size * self.size
