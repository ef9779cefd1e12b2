"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from canvas_snake.config import Difficulty


class DifficultyRequest(BaseModel):
    """Request body for PUT /game/difficulty."""

    difficulty: Difficulty


class ViewportRequest(BaseModel):
    """Request body for PUT /game/viewport."""

    width: int = Field(ge=1, le=10_000)


class ViewportResponse(BaseModel):
    """Canvas geometry after a resize."""

    canvas_size: int
    grid_size: int


class HighScoreResponse(BaseModel):
    high_score: int
