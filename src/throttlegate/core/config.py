from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Settings:
    admin_api_token: str
    throttle_quota: int
    throttle_window_sec: int
    sweep_interval_sec: int

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            admin_api_token=_required("ADMIN_API_TOKEN"),
            throttle_quota=_int_env("THROTTLE_QUOTA", 3, minimum=1),
            throttle_window_sec=_int_env("THROTTLE_WINDOW_SEC", 60, minimum=1),
            sweep_interval_sec=_int_env("SWEEP_INTERVAL_SEC", 300, minimum=1),
        )


def _required(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def _int_env(name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    try:
        value = default if raw is None else int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}")
    return value
