"""Single-owner asyncio tick loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

TickCallback = Callable[[], Awaitable[bool]]


class TickScheduler:
    """Calls an async tick callback at a fixed interval.

    At most one loop task exists at a time, so ticks never overlap. The
    callback returns ``False`` to end the loop from inside a tick.
    """

    def __init__(self, callback: TickCallback) -> None:
        self._callback = callback
        self._task: asyncio.Task | None = None
        self.interval_ms: int | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, interval_ms: int) -> None:
        """Start ticking every *interval_ms*. Requires a running loop."""
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        if self.running:
            raise RuntimeError("Scheduler is already running.")
        self.interval_ms = interval_ms
        self._task = asyncio.create_task(self._run(interval_ms / 1000.0))
        logger.info("Tick loop started at %d ms.", interval_ms)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        if task is asyncio.current_task():
            return
        await asyncio.gather(task, return_exceptions=True)

    async def restart(self, interval_ms: int) -> None:
        """Replace the running loop with a fresh one at *interval_ms*."""
        await self.stop()
        self.start(interval_ms)

    async def _run(self, interval: float) -> None:
        try:
            while True:
                await asyncio.sleep(interval)
                if not await self._callback():
                    break
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled.")
        except Exception:
            logger.exception("Tick loop error; stopping.")
