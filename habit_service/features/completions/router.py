"""API router for the completions feature."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Query, status

from habit_service.core.dependencies import CompletionServiceDep, IdentityDep
from habit_service.core.schemas.envelope import ApiResponse, ok
from habit_service.features.completions.models import CompletionLog
from habit_service.features.completions.schemas import CompletionCreate, CompletionFilter

router = APIRouter(prefix="/completions", tags=["completions"])


@router.post(
    "",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Log a completion",
    description="Record that the caller completed a habit. source defaults to 'api'.",
)
async def create_completion(
    payload: CompletionCreate,
    identity: IdentityDep,
    service: CompletionServiceDep,
) -> dict[str, Any]:
    completion = await service.create_completion(identity, payload)
    return ok(completion.to_api(), "Habit completion logged successfully")


@router.get(
    "/{user_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="List a user's completions",
    description="Newest first. startDate and endDate are inclusive ISO 8601 timestamps.",
)
async def list_completions(
    user_id: str,
    identity: IdentityDep,
    service: CompletionServiceDep,
    habit_id: Annotated[str | None, Query(alias="habitId")] = None,
    start_date: Annotated[datetime | None, Query(alias="startDate")] = None,
    end_date: Annotated[datetime | None, Query(alias="endDate")] = None,
    limit: Annotated[int | None, Query(description="Page size, capped at 100")] = None,
    offset: int = 0,
) -> dict[str, Any]:
    filters = CompletionFilter(habit_id=habit_id, start_date=start_date, end_date=end_date)
    connection = await service.list_completions(identity, user_id, filters, limit=limit, offset=offset)
    return ok(connection.to_offset_page(offset).dump(CompletionLog.to_api))


@router.get(
    "/{user_id}/stats",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="Completion statistics",
    description="Counts by day, habit and source over the last `days` days (max 365).",
)
async def completion_stats(
    user_id: str,
    identity: IdentityDep,
    service: CompletionServiceDep,
    days: Annotated[int | None, Query(description="Window length in days")] = None,
) -> dict[str, Any]:
    stats = await service.completion_stats(identity, user_id, days)
    return ok(stats.to_api())


@router.delete(
    "/{user_id}/{completion_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="Delete a completion",
)
async def delete_completion(
    user_id: str,
    completion_id: str,
    identity: IdentityDep,
    service: CompletionServiceDep,
) -> dict[str, Any]:
    await service.delete_completion(identity, completion_id, user_id)
    return {"success": True, "message": "Completion log entry deleted successfully"}
