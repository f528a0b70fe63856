from __future__ import annotations

import math

from fastapi import APIRouter, Header, HTTPException, Request, Response, status

from throttlegate.api.schemas import (
    ClearedResponse,
    DecisionRequest,
    DecisionResponse,
    ErrorResponse,
    StatsResponse,
)
from throttlegate.core.auth import is_valid_bearer
from throttlegate.core.throttle import FixedWindowThrottle

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.post(
    "/v1/decisions",
    response_model=DecisionResponse,
    responses={429: {"model": DecisionResponse}},
)
def decide(payload: DecisionRequest, request: Request, response: Response) -> DecisionResponse:
    throttle: FixedWindowThrottle = request.app.state.container.throttle
    decision = throttle.check(payload.identity)

    response.headers["X-RateLimit-Limit"] = str(throttle.quota)
    response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
    response.headers["X-RateLimit-Reset"] = str(math.ceil(decision.reset_at))
    if not decision.allowed:
        response.status_code = status.HTTP_429_TOO_MANY_REQUESTS
        retry_after = decision.retry_after(throttle.clock.now())
        response.headers["Retry-After"] = str(max(1, math.ceil(retry_after)))

    return DecisionResponse(
        allowed=decision.allowed,
        remaining=decision.remaining,
        reset_at=decision.reset_at,
        limit=throttle.quota,
    )


@router.get(
    "/v1/stats",
    response_model=StatsResponse,
    responses={401: {"model": ErrorResponse}},
)
def stats(request: Request, authorization: str | None = Header(default=None)) -> StatsResponse:
    throttle = _admin_throttle(request, authorization)
    return StatsResponse(
        tracked_identities=throttle.tracked_identities(),
        quota=throttle.quota,
        window_sec=throttle.window_sec,
    )


@router.delete(
    "/v1/identities/{identity}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def reset_identity(
    identity: str,
    request: Request,
    authorization: str | None = Header(default=None),
) -> Response:
    throttle = _admin_throttle(request, authorization)
    if not throttle.reset(identity):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="identity not tracked")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/v1/identities",
    response_model=ClearedResponse,
    responses={401: {"model": ErrorResponse}},
)
def reset_all(request: Request, authorization: str | None = Header(default=None)) -> ClearedResponse:
    throttle = _admin_throttle(request, authorization)
    return ClearedResponse(cleared=throttle.reset_all())


def _admin_throttle(request: Request, authorization: str | None) -> FixedWindowThrottle:
    container = request.app.state.container
    if not is_valid_bearer(authorization, container.settings.admin_api_token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid or missing token",
        )
    return container.throttle
