from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class WindowState:
    count: int
    window_start: float


@dataclass(frozen=True)
class Decision:
    allowed: bool
    remaining: int
    reset_at: float

    def retry_after(self, now: float) -> float:
        return max(0.0, self.reset_at - now)


class Clock(Protocol):
    def now(self) -> float:
        raise NotImplementedError
