"""GraphQL types for habits.

Provides:
- HabitType and TimeWindowType
- HabitsFilterInput
- Connection types: HabitEdge, HabitConnection
"""

from __future__ import annotations

from datetime import datetime

import strawberry

from habit_service.core.pagination import Connection
from habit_service.features.graphql.types.base import PageInfoType
from habit_service.features.habits.models import Category, Habit, TimeWindow

CategoryEnum = strawberry.enum(Category, name="Category", description="How often a habit is practised")


@strawberry.type(name="TimeWindow", description="Hours of the day in which a habit is suggested")
class TimeWindowType:
    start_hour: int
    end_hour: int
    description: str | None = None

    @classmethod
    def from_model(cls, window: TimeWindow) -> TimeWindowType:
        return cls(start_hour=window.start_hour, end_hour=window.end_hour, description=window.description)


@strawberry.type(name="Habit", description="A habit with its hadith reference")
class HabitType:
    id: str
    title: str
    hadith_arabic: str
    hadith_english: str
    benefits: str
    tags: list[str]
    category: CategoryEnum
    priority: float = strawberry.field(description="Higher is more prominent")
    context_tags: list[str]
    life_event: str | None = None
    time_window: TimeWindowType | None = None
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, habit: Habit) -> HabitType:
        return cls(
            id=habit.id,
            title=habit.title,
            hadith_arabic=habit.hadith_arabic,
            hadith_english=habit.hadith_english,
            benefits=habit.benefits,
            tags=list(habit.tags),
            category=habit.category,
            priority=habit.priority,
            context_tags=list(habit.context_tags),
            life_event=habit.life_event,
            time_window=TimeWindowType.from_model(habit.time_window) if habit.time_window else None,
            created_at=habit.created_at,
        )


@strawberry.input(name="HabitsFilter", description="Filters for the habits connection")
class HabitsFilterInput:
    category: CategoryEnum | None = None
    tags: list[str] | None = strawberry.field(
        default=None,
        description="Matches habits with any of these tags; only the first 10 apply",
    )


@strawberry.type(name="HabitEdge")
class HabitEdge:
    node: HabitType
    cursor: str


@strawberry.type(name="HabitsConnection")
class HabitConnection:
    edges: list[HabitEdge]
    page_info: PageInfoType
    total_count: int

    @classmethod
    def from_connection(cls, connection: Connection[Habit]) -> HabitConnection:
        return cls(
            edges=[HabitEdge(node=HabitType.from_model(edge.node), cursor=edge.cursor) for edge in connection.edges],
            page_info=PageInfoType.from_model(connection.page_info),
            total_count=connection.total_count,
        )


__all__ = [
    "CategoryEnum",
    "HabitConnection",
    "HabitEdge",
    "HabitType",
    "HabitsFilterInput",
    "TimeWindowType",
]
