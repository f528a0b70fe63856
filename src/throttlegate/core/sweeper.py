from __future__ import annotations

import asyncio
import logging

from throttlegate.core.throttle import FixedWindowThrottle

LOG = logging.getLogger(__name__)


class ExpiredWindowSweeper:
    def __init__(self, throttle: FixedWindowThrottle, interval_sec: float) -> None:
        self._throttle = throttle
        self._interval_sec = interval_sec
        self._task: asyncio.Task[None] | None = None
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> None:
        if self._started:
            return
        self._started = True
        self._task = asyncio.create_task(self._sweep_loop(), name="throttle-sweeper")

    async def stop(self) -> None:
        if not self._started:
            return
        self._started = False
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None

    def sweep_once(self) -> int:
        return self._throttle.evict_expired()

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_sec)
            evicted = self.sweep_once()
            LOG.debug(
                "sweep finished evicted=%s tracked=%s",
                evicted,
                self._throttle.tracked_identities(),
            )
