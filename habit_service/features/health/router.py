"""Health check endpoint. Unauthenticated and outside the API prefix."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from habit_service.core.settings import get_app_settings
from habit_service.features.health.schemas import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns healthy while the process can serve requests",
)
async def health_check() -> HealthResponse:
    return HealthResponse(timestamp=datetime.now(UTC), version=get_app_settings().version)
