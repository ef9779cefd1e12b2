"""Canvas Snake: single-player grid snake engine."""

from canvas_snake.config import Difficulty, GameConfig
from canvas_snake.engine import GameEngine, GameStatus, Snapshot
from canvas_snake.grid import Grid
from canvas_snake.scores import JsonScoreStore, MemoryScoreStore, ScoreStore
from canvas_snake.session import GameSession
from canvas_snake.snake import Direction, Snake

__all__ = [
    "Difficulty",
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameSession",
    "GameStatus",
    "Grid",
    "JsonScoreStore",
    "MemoryScoreStore",
    "ScoreStore",
    "Snake",
    "Snapshot",
]
