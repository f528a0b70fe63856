from __future__ import annotations

import time


class MonotonicClock:
    def now(self) -> float:
        return time.monotonic()


class WallClock:
    # Unix time for epoch reset headers; can step backwards, unlike MonotonicClock.
    def now(self) -> float:
        return time.time()
