"""GraphQL types for completion logs and statistics."""

from __future__ import annotations

from datetime import datetime

import strawberry
from strawberry.types import Info

from habit_service.core.pagination import Connection
from habit_service.features.completions.models import CompletionLog, CompletionSource
from habit_service.features.completions.schemas import CompletionCreate
from habit_service.features.completions.stats import CategoryCount, CompletionSummary
from habit_service.features.graphql.context import GraphQLContext
from habit_service.features.graphql.types.base import PageInfoType
from habit_service.features.graphql.types.habits import CategoryEnum, HabitType

CompletionSourceEnum = strawberry.enum(
    CompletionSource,
    name="CompletionSource",
    description="Where a completion was logged from",
)


@strawberry.type(name="CompletionLog", description="One completion of a habit")
class CompletionLogType:
    id: str
    habit_id: str
    completed_at: datetime
    source: CompletionSourceEnum
    note: str | None = None

    @strawberry.field(description="The completed habit, null if it no longer exists")
    async def habit(self, info: Info[GraphQLContext, None]) -> HabitType | None:
        habit = await info.context.loaders.habits.load(self.habit_id)
        return HabitType.from_model(habit) if habit else None

    @classmethod
    def from_model(cls, log: CompletionLog) -> CompletionLogType:
        return cls(
            id=log.id,
            habit_id=log.habit_id,
            completed_at=log.completed_at,
            source=log.source,
            note=log.note,
        )


@strawberry.input(name="CreateCompletionInput", description="Payload for logging a completion")
class CreateCompletionInput:
    habit_id: str
    source: CompletionSourceEnum = CompletionSource.API
    note: str | None = None

    def to_pydantic(self) -> CompletionCreate:
        return CompletionCreate(habit_id=self.habit_id, source=self.source, note=self.note)


@strawberry.type(name="CompletionLogEdge")
class CompletionLogEdge:
    node: CompletionLogType
    cursor: str


@strawberry.type(name="CompletionLogsConnection")
class CompletionLogConnection:
    edges: list[CompletionLogEdge]
    page_info: PageInfoType
    total_count: int

    @classmethod
    def from_connection(cls, connection: Connection[CompletionLog]) -> CompletionLogConnection:
        return cls(
            edges=[
                CompletionLogEdge(node=CompletionLogType.from_model(edge.node), cursor=edge.cursor)
                for edge in connection.edges
            ],
            page_info=PageInfoType.from_model(connection.page_info),
            total_count=connection.total_count,
        )


@strawberry.type(name="CategoryStats")
class CategoryStatsType:
    category: CategoryEnum
    count: int
    percentage: float = strawberry.field(description="Share of categorised completions, one decimal")

    @classmethod
    def from_model(cls, entry: CategoryCount) -> CategoryStatsType:
        return cls(category=entry.category, count=entry.count, percentage=entry.percentage)


@strawberry.type(name="CompletionStats", description="All-time completion summary")
class CompletionStatsType:
    total_completions: int
    completions_this_week: int = strawberry.field(description="Since Sunday 00:00 UTC")
    completions_this_month: int = strawberry.field(description="Since the 1st of the month, UTC")
    current_streak: int = strawberry.field(
        description="Consecutive UTC days with a completion, ending today or yesterday",
    )
    longest_streak: int
    completions_by_category: list[CategoryStatsType]
    recent_completions: list[CompletionLogType]

    @classmethod
    def from_model(cls, summary: CompletionSummary) -> CompletionStatsType:
        return cls(
            total_completions=summary.total_completions,
            completions_this_week=summary.completions_this_week,
            completions_this_month=summary.completions_this_month,
            current_streak=summary.current_streak,
            longest_streak=summary.longest_streak,
            completions_by_category=[CategoryStatsType.from_model(c) for c in summary.completions_by_category],
            recent_completions=[CompletionLogType.from_model(log) for log in summary.recent_completions],
        )


__all__ = [
    "CategoryStatsType",
    "CompletionLogConnection",
    "CompletionLogEdge",
    "CompletionLogType",
    "CompletionSourceEnum",
    "CompletionStatsType",
    "CreateCompletionInput",
]
