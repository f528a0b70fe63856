from __future__ import annotations

import logging
import math

from throttlegate.core.clock import MonotonicClock
from throttlegate.core.interfaces import Clock, Decision
from throttlegate.core.window_store import WindowStore

LOG = logging.getLogger(__name__)


class ThrottleConfigError(ValueError):
    pass


class FixedWindowThrottle:
    """Per-identity fixed-window admission control.

    Every call is counted, denied ones included, so a caller hammering past
    the quota keeps seeing ``remaining=0`` and a stable ``reset_at`` until the
    window rolls over.

    A window expires only once ``now - window_start`` is strictly greater
    than ``window_sec``: a request landing exactly on ``reset_at`` is still
    charged to the old window.
    """

    def __init__(self, quota: int, window_sec: float, clock: Clock | None = None) -> None:
        if isinstance(quota, bool) or not isinstance(quota, int) or quota <= 0:
            raise ThrottleConfigError(f"quota must be a positive integer, got {quota!r}")
        if (
            isinstance(window_sec, bool)
            or not isinstance(window_sec, (int, float))
            or not math.isfinite(window_sec)
            or window_sec <= 0
        ):
            raise ThrottleConfigError(
                f"window_sec must be a positive finite number, got {window_sec!r}",
            )
        self._quota = quota
        self._window_sec = window_sec
        self._clock = clock or MonotonicClock()
        self._store = WindowStore()

    @property
    def quota(self) -> int:
        return self._quota

    @property
    def window_sec(self) -> float:
        return self._window_sec

    @property
    def clock(self) -> Clock:
        return self._clock

    def check(self, identity: str, now: float | None = None) -> Decision:
        ts = self._clock.now() if now is None else now
        with self._store.acquire(identity, ts) as state:
            if self._expired(state.window_start, ts):
                state.count = 0
                state.window_start = ts
            state.count += 1
            decision = Decision(
                allowed=state.count <= self._quota,
                remaining=max(0, self._quota - state.count),
                reset_at=state.window_start + self._window_sec,
            )
        if not decision.allowed:
            LOG.debug("throttled identity=%r reset_at=%s", identity, decision.reset_at)
        return decision

    def allow(self, identity: str, now: float | None = None) -> bool:
        return self.check(identity, now=now).allowed

    def reset(self, identity: str) -> bool:
        removed = self._store.remove(identity)
        if removed:
            LOG.info("reset throttle window identity=%r", identity)
        return removed

    def reset_all(self) -> int:
        cleared = self._store.clear()
        LOG.info("reset all throttle windows cleared=%s", cleared)
        return cleared

    def evict_expired(self, now: float | None = None) -> int:
        # Lossless: an expired entry would be reset on its next check anyway.
        ts = self._clock.now() if now is None else now
        evicted = self._store.evict(lambda state: self._expired(state.window_start, ts))
        if evicted:
            LOG.info("evicted expired throttle windows count=%s", evicted)
        return evicted

    def tracked_identities(self) -> int:
        return self._store.count()

    def _expired(self, window_start: float, now: float) -> bool:
        return now - window_start > self._window_sec
