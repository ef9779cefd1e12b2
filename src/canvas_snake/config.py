"""Game configuration and difficulty levels."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from canvas_snake.grid import canvas_size_for, grid_size_for

logger = logging.getLogger(__name__)


class Difficulty(str, enum.Enum):
    """Named speeds, each mapped to a tick interval."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def tick_ms(self) -> int:
        return _TICK_MS[self]


_TICK_MS: dict[Difficulty, int] = {
    Difficulty.EASY: 150,
    Difficulty.MEDIUM: 100,
    Difficulty.HARD: 70,
}


@dataclass(frozen=True)
class GameConfig:
    """Board geometry, speed, and storage settings.

    Supports JSON serialization so a setup can be shared between runs.
    """

    cell_size: int = 20
    max_canvas_size: int = 600
    canvas_margin: int = 40
    viewport_width: int = 640
    difficulty: str = Difficulty.MEDIUM.value
    high_score_file: str = "~/.canvas_snake/high_score.json"
    seed: int | None = None

    def __post_init__(self) -> None:
        # Raises ValueError on an unknown level.
        Difficulty(self.difficulty)
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")

    @property
    def canvas_size(self) -> int:
        return canvas_size_for(
            self.viewport_width, self.canvas_margin, self.max_canvas_size,
        )

    @property
    def grid_size(self) -> int:
        return grid_size_for(self.canvas_size, self.cell_size)

    @property
    def tick_ms(self) -> int:
        return Difficulty(self.difficulty).tick_ms

    def with_overrides(self, **overrides) -> GameConfig:
        """Return a copy with the non-``None`` overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

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
        return cls(**json.loads(Path(path).read_text()))
