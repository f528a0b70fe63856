from __future__ import annotations

import pytest

from throttlegate.core.clock import WallClock
from throttlegate.core.config import Settings
from throttlegate.main import create_app


async def test_lifespan_starts_and_stops_sweeper(test_settings: Settings) -> None:
    app = create_app(settings=test_settings)
    async with app.router.lifespan_context(app):
        assert app.state.container.sweeper.started is True
    assert app.state.container.sweeper.started is False


def test_create_app_wires_throttle_from_settings(test_settings: Settings, clock) -> None:
    app = create_app(settings=test_settings, clock=clock)

    throttle = app.state.container.throttle
    assert throttle.quota == test_settings.throttle_quota
    assert throttle.window_sec == test_settings.throttle_window_sec
    assert throttle.clock is clock


def test_create_app_defaults_to_wall_clock(test_settings: Settings) -> None:
    app = create_app(settings=test_settings)

    assert isinstance(app.state.container.throttle.clock, WallClock)


def test_create_app_loads_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ADMIN_API_TOKEN", "env-token")
    monkeypatch.setenv("THROTTLE_QUOTA", "7")

    app = create_app()

    assert app.state.container.settings.admin_api_token == "env-token"
    assert app.state.container.throttle.quota == 7
