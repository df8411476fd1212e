"""
Health check endpoints.

Provides liveness and readiness probes with a storage connectivity check.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from deckvault.api.dependencies import get_store
from deckvault.store.app_store import AppStore

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    storage: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    store: Annotated[AppStore, Depends(get_store)],
) -> HealthResponse:
    """
    Readiness probe.

    Ready once the store has loaded. Without a persistence backend the
    service runs in memory and is still ready. Returns 503 if the backend
    is configured but unreachable.
    """
    if not store.initialized:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", storage="loading")

    if not store.storage.available:
        return HealthResponse(status="ready", storage="memory")

    if await store.storage.ping():
        return HealthResponse(status="ready", storage="connected")

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", storage="disconnected")
