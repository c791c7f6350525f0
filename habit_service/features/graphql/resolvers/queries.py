"""Query resolvers for the GraphQL API.

Resolvers only translate arguments and results; access checks, paging and
validation happen in the services, exactly as for the REST routes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

import strawberry
from strawberry.types import Info

from habit_service.core.exceptions import NotFoundException
from habit_service.features.completions.schemas import CompletionFilter
from habit_service.features.graphql.context import GraphQLContext
from habit_service.features.graphql.types import (
    BundleConnection,
    BundleType,
    CompletionLogConnection,
    CompletionStatsType,
    HabitConnection,
    HabitsFilterInput,
    HabitType,
    UserType,
)
from habit_service.features.habits.schemas import HabitFilter

AfterArg = Annotated[str | None, strawberry.argument(description="Cursor to start after")]


@strawberry.type(description="Root query type")
class Query:
    @strawberry.field(description="Habits by priority, highest first")
    async def habits(
        self,
        info: Info[GraphQLContext, None],
        filter: HabitsFilterInput | None = None,
        first: int = 50,
        after: AfterArg = None,
    ) -> HabitConnection:
        ctx = info.context
        filters = HabitFilter(
            category=filter.category if filter else None,
            tags=(filter.tags or []) if filter else [],
        )
        connection = await ctx.services.habits.list_habits(ctx.identity, filters, limit=first, after=after)
        return HabitConnection.from_connection(connection)

    @strawberry.field(description="One habit, null if it does not exist")
    async def habit(self, info: Info[GraphQLContext, None], id: str) -> HabitType | None:
        ctx = info.context
        try:
            habit = await ctx.services.habits.get_habit(ctx.identity, id)
        except NotFoundException:
            return None
        return HabitType.from_model(habit)

    @strawberry.field(description="Substring search over the top habits by priority")
    async def search_habits(
        self,
        info: Info[GraphQLContext, None],
        query: str,
        limit: int = 20,
    ) -> list[HabitType]:
        ctx = info.context
        habits = await ctx.services.habits.search_habits(ctx.identity, query, limit)
        return [HabitType.from_model(habit) for habit in habits]

    @strawberry.field(description="Bundles by display order")
    async def bundles(
        self,
        info: Info[GraphQLContext, None],
        first: int = 20,
        after: AfterArg = None,
    ) -> BundleConnection:
        ctx = info.context
        connection = await ctx.services.bundles.list_bundles(ctx.identity, limit=first, after=after)
        return BundleConnection.from_connection(connection)

    @strawberry.field(description="One bundle, null if it does not exist")
    async def bundle(self, info: Info[GraphQLContext, None], id: str) -> BundleType | None:
        ctx = info.context
        try:
            bundle = await ctx.services.bundles.get_bundle(ctx.identity, id)
        except NotFoundException:
            return None
        return BundleType.from_model(bundle)

    @strawberry.field(description="A bundle's habits in bundle order")
    async def bundle_habits(self, info: Info[GraphQLContext, None], bundle_id: str) -> list[HabitType]:
        ctx = info.context
        habits = await ctx.services.bundles.list_bundle_habits(ctx.identity, bundle_id)
        return [HabitType.from_model(habit) for habit in habits]

    @strawberry.field(description="A user profile, null if it does not exist")
    async def user(self, info: Info[GraphQLContext, None], user_id: str) -> UserType | None:
        ctx = info.context
        try:
            user = await ctx.services.users.get_user(ctx.identity, user_id)
        except NotFoundException:
            return None
        return UserType.from_model(user)

    @strawberry.field(description="The caller's profile, null before registration")
    async def me(self, info: Info[GraphQLContext, None]) -> UserType | None:
        ctx = info.context
        user = await ctx.services.users.get_me(ctx.identity)
        return UserType.from_model(user) if user else None

    @strawberry.field(description="A user's completions, newest first")
    async def completions(
        self,
        info: Info[GraphQLContext, None],
        user_id: str,
        habit_id: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        first: int = 50,
        after: AfterArg = None,
    ) -> CompletionLogConnection:
        ctx = info.context
        filters = CompletionFilter(habit_id=habit_id, start_date=start_date, end_date=end_date)
        connection = await ctx.services.completions.list_completions(
            ctx.identity,
            user_id,
            filters,
            limit=first,
            after=after,
        )
        return CompletionLogConnection.from_connection(connection)

    @strawberry.field(description="All-time completion totals, streaks and categories")
    async def completion_stats(self, info: Info[GraphQLContext, None], user_id: str) -> CompletionStatsType:
        ctx = info.context
        summary = await ctx.services.completions.completion_summary(ctx.identity, user_id)
        return CompletionStatsType.from_model(summary)


__all__ = ["Query"]
