"""API router for the habits feature."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Query

from habit_service.core.dependencies import HabitServiceDep, IdentityDep
from habit_service.core.schemas.envelope import ApiResponse, ok
from habit_service.features.habits.models import Category, Habit
from habit_service.features.habits.schemas import HabitFilter

router = APIRouter(prefix="/habits", tags=["habits"])


@router.get(
    "",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="List habits",
    description="Habits ordered by priority (highest first), filterable by category and tags.",
)
async def list_habits(
    identity: IdentityDep,
    service: HabitServiceDep,
    category: Category | None = None,
    tags: Annotated[list[str] | None, Query(description="Repeatable; matches any")] = None,
    bracket_tags: Annotated[list[str] | None, Query(alias="tags[]", description="Same as tags")] = None,
    limit: Annotated[int | None, Query(description="Page size, capped at 100")] = None,
    offset: int = 0,
) -> dict[str, Any]:
    connection = await service.list_habits(
        identity,
        HabitFilter(category=category, tags=[*(tags or []), *(bracket_tags or [])]),
        limit=limit,
        offset=offset,
    )
    return ok(connection.to_offset_page(offset).dump(Habit.to_api))


@router.get(
    "/search/{query}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="Search habits",
    description="Case-insensitive substring match over the top habits by priority.",
)
async def search_habits(
    query: str,
    identity: IdentityDep,
    service: HabitServiceDep,
    limit: Annotated[int | None, Query(description="Habits scanned, capped at 100")] = None,
) -> dict[str, Any]:
    habits = await service.search_habits(identity, query, limit)
    return ok([habit.to_api() for habit in habits])


@router.get(
    "/{habit_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="Get a habit",
)
async def get_habit(habit_id: str, identity: IdentityDep, service: HabitServiceDep) -> dict[str, Any]:
    habit = await service.get_habit(identity, habit_id)
    return ok(habit.to_api())
