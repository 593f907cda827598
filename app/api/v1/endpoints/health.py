"""Health check endpoints. Liveness has no dependencies; readiness checks Firestore."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.infrastructure.firebase.client import get_firestore_client
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Not ready (Firestore not initialized)", "model": ReadinessErrorResponse}},
)
async def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 if the Firestore client is initialized; 503 otherwise.

    Does not call Firestore; a configured client with bad credentials shows
    up as 503 on the search endpoints instead.
    """
    if get_firestore_client() is None:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(
                status="not_ready",
                message="Firestore not configured (set FIREBASE_SERVICE_ACCOUNT_KEY or PATH)",
            ).model_dump(),
        )
    cache = getattr(request.app.state, "cache", None)
    backend = "redis" if get_settings().redis_enabled and cache is not None else "memory"
    return ReadinessResponse(cache=backend)
