"""Keyboard input mapping."""

from __future__ import annotations

from canvas_snake.snake import Direction

KEY_DIRECTIONS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}

_DIRECTION_NAMES: dict[str, Direction] = {
    d.name.lower(): d for d in Direction
}


def direction_for_key(key: str) -> Direction | None:
    """Translate a browser ``KeyboardEvent.key`` value into a direction.

    WASD keys are matched case-insensitively so Caps Lock does not block
    input. Unmapped keys return ``None``.
    """
    if len(key) == 1:
        key = key.lower()
    return KEY_DIRECTIONS.get(key)


def direction_for_name(name: str) -> Direction | None:
    """Parse ``"up"``/``"down"``/``"left"``/``"right"`` (any case)."""
    return _DIRECTION_NAMES.get(name.lower())
