from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class DecisionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    identity: str = Field(max_length=500)


class DecisionResponse(BaseModel):
    allowed: bool
    remaining: int
    reset_at: float
    limit: int


class StatsResponse(BaseModel):
    tracked_identities: int
    quota: int
    window_sec: float


class ClearedResponse(BaseModel):
    cleared: int


class ErrorResponse(BaseModel):
    detail: str
