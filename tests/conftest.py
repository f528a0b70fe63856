from __future__ import annotations

import pytest

from throttlegate.core.config import Settings


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.value = start

    def now(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(start=1_000.0)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        admin_api_token="secret",
        throttle_quota=3,
        throttle_window_sec=60,
        sweep_interval_sec=300,
    )
