from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI

from throttlegate.api.routes import router
from throttlegate.core.clock import WallClock
from throttlegate.core.config import Settings
from throttlegate.core.interfaces import Clock
from throttlegate.core.sweeper import ExpiredWindowSweeper
from throttlegate.core.throttle import FixedWindowThrottle

LOG = logging.getLogger(__name__)


@dataclass
class AppContainer:
    settings: Settings
    throttle: FixedWindowThrottle
    sweeper: ExpiredWindowSweeper


def create_app(settings: Settings | None = None, clock: Clock | None = None) -> FastAPI:
    _configure_logging()
    cfg = settings or Settings.from_env()

    throttle = FixedWindowThrottle(
        quota=cfg.throttle_quota,
        window_sec=cfg.throttle_window_sec,
        clock=clock or WallClock(),
    )
    container = AppContainer(
        settings=cfg,
        throttle=throttle,
        sweeper=ExpiredWindowSweeper(throttle, interval_sec=cfg.sweep_interval_sec),
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        await container.sweeper.start()
        try:
            yield
        finally:
            await container.sweeper.stop()

    app = FastAPI(title="throttlegate", lifespan=lifespan)
    app.state.container = container
    app.include_router(router)
    LOG.info(
        "app initialized quota=%s window_sec=%s sweep_interval_sec=%s",
        cfg.throttle_quota,
        cfg.throttle_window_sec,
        cfg.sweep_interval_sec,
    )
    return app


def _configure_logging() -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
