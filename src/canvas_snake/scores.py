"""Best-score persistence."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    """Persists a single best-score integer across sessions."""

    def get_high_score(self) -> int: ...

    def set_high_score(self, score: int) -> None: ...


def _check_score(score: int) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise TypeError("High score must be an integer.")
    if score < 0:
        raise ValueError("High score must be non-negative.")
    return score


class MemoryScoreStore:
    """In-process store, mainly for tests and headless runs."""

    def __init__(self, initial: int = 0) -> None:
        self._score = _check_score(initial)

    def get_high_score(self) -> int:
        return self._score

    def set_high_score(self, score: int) -> None:
        self._score = _check_score(score)


class JsonScoreStore:
    """Stores the best score as ``{"high_score": n}`` in a JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()

    def get_high_score(self) -> int:
        """Return the stored score, or 0 if the file is missing or invalid."""
        if not self.path.exists():
            return 0
        try:
            raw = json.loads(self.path.read_text())
            return _check_score(raw["high_score"])
        except (OSError, ValueError, TypeError, KeyError):
            logger.warning(
                "Ignoring unreadable high score file %s.", self.path,
            )
            return 0

    def set_high_score(self, score: int) -> None:
        """Write *score* to disk, creating parent directories."""
        _check_score(score)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"high_score": score}))
        logger.info("High score %d saved to %s", score, self.path)

    def clear(self) -> None:
        """Delete the stored score."""
        self.path.unlink(missing_ok=True)
