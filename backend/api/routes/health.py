"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shared.config import get_settings
from ..dependencies import get_game_repository

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(games=Depends(get_game_repository)):
    """
    Readiness check endpoint.

    Runs a trivial catalog count; responds 503 if the datastore is unreachable.
    """
    try:
        await games.count()
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(status="unavailable", database="unreachable").model_dump(),
        )
    return ReadinessResponse(status="ready", database="connected")
