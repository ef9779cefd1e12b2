"""WebSocket handler streaming snapshots and receiving key presses."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from canvas_snake.controls import direction_for_name
from canvas_snake.engine import Snapshot
from canvas_snake.session import GameSession

logger = logging.getLogger(__name__)

ws_router = APIRouter()

# Slow clients drop frames instead of growing memory.
_MAX_QUEUED_FRAMES = 32


class QueueRenderer:
    """Renderer that hands serialized snapshots to one socket's send loop."""

    def __init__(self, maxsize: int = _MAX_QUEUED_FRAMES) -> None:
        self.queue: asyncio.Queue[str] = asyncio.Queue(maxsize=maxsize)

    def render(self, snapshot: Snapshot) -> None:
        payload = json.dumps(snapshot.to_dict(), separators=(",", ":"))
        if self.queue.full():
            self.queue.get_nowait()
        self.queue.put_nowait(payload)


def _get_session(ws: WebSocket) -> GameSession:
    return ws.app.state.session


async def _send_frames(websocket: WebSocket, renderer: QueueRenderer) -> None:
    while True:
        payload = await renderer.queue.get()
        await websocket.send_text(payload)


async def _apply_message(session: GameSession, raw: str) -> None:
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return
    if not isinstance(msg, dict):
        return

    key = msg.get("key")
    if isinstance(key, str):
        await session.handle_key(key)
        return

    name = msg.get("direction")
    if isinstance(name, str):
        direction = direction_for_name(name)
        if direction is not None:
            await session.handle_direction(direction)


@ws_router.websocket("/game/play")
async def play(websocket: WebSocket) -> None:
    """Send snapshots each tick, accept ``{"key": ...}`` or ``{"direction": ...}``."""
    session = _get_session(websocket)
    await websocket.accept()

    renderer = QueueRenderer()
    renderer.render(session.snapshot())
    session.add_renderer(renderer)
    sender = asyncio.create_task(_send_frames(websocket, renderer))
    logger.info("Player connected.")

    try:
        while True:
            raw = await websocket.receive_text()
            await _apply_message(session, raw)
    except WebSocketDisconnect:
        logger.info("Player disconnected.")
    finally:
        session.remove_renderer(renderer)
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
