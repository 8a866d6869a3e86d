"""Cancellable periodic task that drives the encounter roulette."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class RouletteTicker:
    """Calls ``on_tick`` every ``interval_ms`` on the running event loop until cancelled.

    Only one tick task exists at a time: ``start`` cancels whatever was
    scheduled before. Without a running loop nothing is scheduled and the
    owner is expected to call its tick function directly.
    """

    def __init__(self, interval_ms: int = 80) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        self._interval = interval_ms / 1000.0
        self._task: asyncio.Task[None] | None = None

    @property
    def interval_ms(self) -> int:
        return int(round(self._interval * 1000))

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, on_tick: Callable[[], object]) -> bool:
        """Schedule ticks; returns False when no event loop is running."""
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; roulette ticks are driven manually")
            return False
        self._task = loop.create_task(self._run(on_tick))
        return True

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _run(self, on_tick: Callable[[], object]) -> None:
        while True:
            await asyncio.sleep(self._interval)
            on_tick()
