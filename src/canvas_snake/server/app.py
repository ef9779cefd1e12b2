"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from canvas_snake.config import GameConfig
from canvas_snake.scores import ScoreStore
from canvas_snake.server.routes import router
from canvas_snake.server.websocket import ws_router
from canvas_snake.session import GameSession


def create_app(
    config: GameConfig | None = None,
    score_store: ScoreStore | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.session = GameSession(config, score_store=score_store)
        yield
        await app.state.session.close()

    app = FastAPI(
        title="Canvas Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
