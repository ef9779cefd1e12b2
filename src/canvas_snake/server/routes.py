"""REST API route handlers for the game session."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from canvas_snake.server.models import (
    DifficultyRequest,
    HighScoreResponse,
    ViewportRequest,
    ViewportResponse,
)
from canvas_snake.session import GameSession

router = APIRouter(tags=["game"])


def _get_session(request: Request) -> GameSession:
    return request.app.state.session


@router.get("/game")
async def get_game(request: Request) -> dict:
    """Current snapshot plus session metadata."""
    return _get_session(request).state()


@router.post("/game/start")
async def start_game(request: Request) -> dict:
    """Start a new game (restarts one in progress)."""
    session = _get_session(request)
    await session.start()
    return session.state()


@router.post("/game/restart")
async def restart_game(request: Request) -> dict:
    session = _get_session(request)
    await session.restart()
    return session.state()


@router.post("/game/pause")
async def pause_game(request: Request) -> dict:
    session = _get_session(request)
    try:
        await session.pause()
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.state()


@router.post("/game/resume")
async def resume_game(request: Request) -> dict:
    session = _get_session(request)
    try:
        await session.resume()
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.state()


@router.put("/game/difficulty")
async def change_difficulty(body: DifficultyRequest, request: Request) -> dict:
    """Change speed; a game in progress restarts at the new interval."""
    session = _get_session(request)
    await session.change_difficulty(body.difficulty)
    return session.state()


@router.put("/game/viewport")
async def resize(body: ViewportRequest, request: Request) -> ViewportResponse:
    """Re-derive the canvas for a new viewport width."""
    session = _get_session(request)
    try:
        grid_size = session.resize(body.width)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return ViewportResponse(canvas_size=session.canvas_size, grid_size=grid_size)


@router.get("/high-score")
async def get_high_score(request: Request) -> HighScoreResponse:
    return HighScoreResponse(high_score=_get_session(request).high_score)
