"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import Settings, get_settings
from shared.database import is_supabase_configured

from ..dependencies import get_search_service

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    question_log: str
    search_backends: int


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=settings.app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(search=Depends(get_search_service)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports which optional backends are configured. Debates still run
    without them: searches return nothing and questions go unrecorded.
    """
    backends = getattr(search, "backends", [])
    return ReadinessResponse(
        status="ready",
        question_log="supabase" if is_supabase_configured() else "disabled",
        search_backends=len(backends),
    )
