"""GraphQL object and input types."""

from habit_service.features.graphql.types.base import PageInfoType
from habit_service.features.graphql.types.bundles import BundleConnection, BundleEdge, BundleType
from habit_service.features.graphql.types.completions import (
    CategoryStatsType,
    CompletionLogConnection,
    CompletionLogEdge,
    CompletionLogType,
    CompletionStatsType,
    CreateCompletionInput,
)
from habit_service.features.graphql.types.habits import (
    HabitConnection,
    HabitEdge,
    HabitsFilterInput,
    HabitType,
    TimeWindowType,
)
from habit_service.features.graphql.types.users import CreateUserInput, UpdateUserInput, UserType

__all__ = [
    "BundleConnection",
    "BundleEdge",
    "BundleType",
    "CategoryStatsType",
    "CompletionLogConnection",
    "CompletionLogEdge",
    "CompletionLogType",
    "CompletionStatsType",
    "CreateCompletionInput",
    "CreateUserInput",
    "HabitConnection",
    "HabitEdge",
    "HabitType",
    "HabitsFilterInput",
    "PageInfoType",
    "TimeWindowType",
    "UpdateUserInput",
    "UserType",
]
