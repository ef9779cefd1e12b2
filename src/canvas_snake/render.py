"""Renderer interface and a plain-text board renderer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TextIO

if TYPE_CHECKING:
    from canvas_snake.engine import Snapshot


class Renderer(Protocol):
    """Draws a snapshot. Implementations must not mutate it."""

    def render(self, snapshot: Snapshot) -> None: ...


HEAD = "@"
BODY = "o"
FOOD = "*"
EMPTY = "."


def draw_board(snapshot: Snapshot) -> str:
    """Return the board as lines of text, one row per grid row."""
    size = snapshot.grid_size
    rows = [[EMPTY] * size for _ in range(size)]
    if snapshot.food is not None:
        fx, fy = snapshot.food
        if 0 <= fx < size and 0 <= fy < size:
            rows[fy][fx] = FOOD
    for index, (x, y) in enumerate(snapshot.snake):
        if 0 <= x < size and 0 <= y < size:
            rows[y][x] = HEAD if index == 0 else BODY
    return "\n".join("".join(row) for row in rows)


class AsciiRenderer:
    """Renders each snapshot as a text board with a status line."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.last_frame: str | None = None

    def render(self, snapshot: Snapshot) -> None:
        status = f"score={snapshot.score} status={snapshot.status.value}"
        if snapshot.won:
            status += " (won)"
        self.last_frame = f"{draw_board(snapshot)}\n{status}"
        if self.stream is not None:
            self.stream.write(self.last_frame + "\n")
