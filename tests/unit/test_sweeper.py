from __future__ import annotations

import asyncio

from throttlegate.core.sweeper import ExpiredWindowSweeper
from throttlegate.core.throttle import FixedWindowThrottle


async def test_sweeper_evicts_expired_windows_periodically(clock) -> None:
    throttle = FixedWindowThrottle(quota=1, window_sec=10, clock=clock)
    throttle.check("idle")
    clock.advance(11)
    throttle.check("active")

    sweeper = ExpiredWindowSweeper(throttle, interval_sec=0.01)
    await sweeper.start()
    try:
        for _ in range(100):
            if throttle.tracked_identities() == 1:
                break
            await asyncio.sleep(0.01)
    finally:
        await sweeper.stop()

    assert throttle.tracked_identities() == 1
    assert throttle.check("active").allowed is False


async def test_sweeper_start_stop_are_idempotent() -> None:
    sweeper = ExpiredWindowSweeper(FixedWindowThrottle(quota=1, window_sec=1), interval_sec=60)

    await sweeper.start()
    first_task = sweeper._task
    await sweeper.start()
    assert sweeper._task is first_task
    assert sweeper.started is True

    await sweeper.stop()
    assert sweeper._task is None
    assert sweeper.started is False
    await sweeper.stop()


def test_sweep_once_returns_evicted_count(clock) -> None:
    throttle = FixedWindowThrottle(quota=1, window_sec=5, clock=clock)
    throttle.check("a")
    throttle.check("b")
    clock.advance(6)

    sweeper = ExpiredWindowSweeper(throttle, interval_sec=60)

    assert sweeper.sweep_once() == 2
    assert sweeper.sweep_once() == 0
