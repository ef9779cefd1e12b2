"""Game driver wiring the engine to its scheduler, renderers, and score store."""

from __future__ import annotations

import asyncio
import logging

from canvas_snake.config import Difficulty, GameConfig
from canvas_snake.controls import direction_for_key
from canvas_snake.engine import GameEngine, GameStatus, Snapshot
from canvas_snake.grid import MIN_GRID_SIZE, canvas_size_for, grid_size_for
from canvas_snake.render import Renderer
from canvas_snake.scheduler import TickScheduler
from canvas_snake.scores import JsonScoreStore, ScoreStore
from canvas_snake.snake import Direction

logger = logging.getLogger(__name__)


class GameSession:
    """Owns one engine and drives it on a fixed tick.

    All engine access goes through ``lock`` so input never lands in the
    middle of a step. Lifecycle commands also hold ``_control`` so a
    stop, reset and start sequence never interleaves with another one.
    Renderers are called after every reset and tick.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        score_store: ScoreStore | None = None,
        renderers: list[Renderer] | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.score_store = (
            score_store if score_store is not None
            else JsonScoreStore(self.config.high_score_file)
        )
        self.renderers: list[Renderer] = list(renderers or [])
        self.difficulty = Difficulty(self.config.difficulty)
        self.viewport_width = self.config.viewport_width
        self.grid_size = self.config.grid_size
        self.engine = GameEngine(self.grid_size, seed=self.config.seed)
        self.high_score = self.score_store.get_high_score()
        self.lock = asyncio.Lock()
        self._control = asyncio.Lock()
        self.scheduler = TickScheduler(self._tick)

    @property
    def canvas_size(self) -> int:
        return canvas_size_for(
            self.viewport_width,
            self.config.canvas_margin,
            self.config.max_canvas_size,
        )

    @property
    def tick_ms(self) -> int:
        return self.difficulty.tick_ms

    def snapshot(self) -> Snapshot:
        return self.engine.snapshot()

    def state(self) -> dict:
        """Return the snapshot plus session metadata as a plain dict."""
        result = self.snapshot().to_dict()
        result.update(
            high_score=self.high_score,
            difficulty=self.difficulty.value,
            tick_rate_ms=self.tick_ms,
            canvas_size=self.canvas_size,
            next_grid_size=self.grid_size,
        )
        return result

    def add_renderer(self, renderer: Renderer) -> None:
        self.renderers.append(renderer)

    def remove_renderer(self, renderer: Renderer) -> None:
        if renderer in self.renderers:
            self.renderers.remove(renderer)

    async def start(self) -> Snapshot:
        """Reset the engine and (re)start the tick loop."""
        async with self._control:
            return await self._start()

    async def restart(self) -> Snapshot:
        return await self.start()

    async def pause(self) -> Snapshot:
        """Stop ticking; the engine keeps its state."""
        async with self._control:
            async with self.lock:
                self.engine.pause()
                snapshot = self.engine.snapshot()
            await self.scheduler.stop()
        self._render(snapshot)
        return snapshot

    async def resume(self) -> Snapshot:
        async with self._control:
            async with self.lock:
                self.engine.resume()
                snapshot = self.engine.snapshot()
            self.scheduler.start(self.tick_ms)
        self._render(snapshot)
        return snapshot

    async def change_difficulty(self, difficulty: str | Difficulty) -> None:
        """Switch speed; a game in progress restarts at the new interval."""
        async with self._control:
            self.difficulty = Difficulty(difficulty)
            logger.info("Difficulty set to %s.", self.difficulty.value)
            if self.engine.status in (GameStatus.RUNNING, GameStatus.PAUSED):
                await self._start()

    async def _start(self) -> Snapshot:
        # Caller holds ``_control``; the tick loop only takes ``lock``.
        await self.scheduler.stop()
        async with self.lock:
            snapshot = self.engine.reset(self.grid_size)
        self.scheduler.start(self.tick_ms)
        logger.info(
            "Game started on a %dx%d grid (%s).",
            self.grid_size, self.grid_size, self.difficulty.value,
        )
        self._render(snapshot)
        return snapshot

    def resize(self, viewport_width: int) -> int:
        """Re-derive the canvas for a new viewport width.

        The running engine keeps its board; the new grid size applies from
        the next start. Returns that grid size.
        """
        canvas = canvas_size_for(
            viewport_width,
            self.config.canvas_margin,
            self.config.max_canvas_size,
        )
        grid_size = grid_size_for(canvas, self.config.cell_size)
        if grid_size < MIN_GRID_SIZE:
            raise ValueError(
                f"Viewport width {viewport_width} is too narrow for the board.",
            )
        self.viewport_width = viewport_width
        self.grid_size = grid_size
        self._render(self.engine.snapshot())
        return grid_size

    async def handle_key(self, key: str) -> bool:
        """Apply a raw key press. Returns False for unmapped keys."""
        direction = direction_for_key(key)
        if direction is None:
            return False
        await self.handle_direction(direction)
        return True

    async def handle_direction(self, direction: Direction) -> None:
        async with self.lock:
            if self.engine.status == GameStatus.RUNNING:
                self.engine.set_direction(direction)

    def update_high_score(self, score: int) -> bool:
        """Persist *score* if it beats the best so far."""
        if score <= self.high_score:
            return False
        self.score_store.set_high_score(score)
        self.high_score = score
        logger.info("New high score: %d.", score)
        return True

    async def close(self) -> None:
        async with self._control:
            await self.scheduler.stop()

    async def _tick(self) -> bool:
        async with self.lock:
            snapshot = self.engine.step()
        try:
            self.update_high_score(snapshot.score)
        except Exception:
            logger.exception(
                "Could not save high score %d; ending game.", snapshot.score,
            )
            async with self.lock:
                self.engine.end()
                snapshot = self.engine.snapshot()
        self._render(snapshot)
        return snapshot.status == GameStatus.RUNNING

    def _render(self, snapshot: Snapshot) -> None:
        for renderer in list(self.renderers):
            renderer.render(snapshot)
