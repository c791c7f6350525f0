"""Mutation resolvers for the GraphQL API."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import strawberry
from pydantic import ValidationError
from strawberry.types import Info

from habit_service.core.exceptions import InvalidInputException
from habit_service.features.graphql.context import GraphQLContext
from habit_service.features.graphql.types import (
    CompletionLogType,
    CreateCompletionInput,
    CreateUserInput,
    UpdateUserInput,
    UserType,
)

T = TypeVar("T")


def _validated(build: Callable[[], T]) -> T:
    """Run an input conversion, reporting schema failures as invalid input."""
    try:
        return build()
    except ValidationError as e:
        first = e.errors(include_url=False)[0]
        field = ".".join(str(part) for part in first["loc"])
        raise InvalidInputException(f"{field}: {first['msg']}", extra={"field": field}) from e


@strawberry.type(description="Root mutation type")
class Mutation:
    @strawberry.mutation(description="Register the caller")
    async def create_user(self, info: Info[GraphQLContext, None], input: CreateUserInput) -> UserType:
        ctx = info.context
        user = await ctx.services.users.create_user(ctx.identity, _validated(input.to_pydantic))
        return UserType.from_model(user)

    @strawberry.mutation(description="Change display name or locale")
    async def update_user(
        self,
        info: Info[GraphQLContext, None],
        user_id: str,
        input: UpdateUserInput,
    ) -> UserType:
        ctx = info.context
        user = await ctx.services.users.update_user(ctx.identity, user_id, _validated(input.to_pydantic))
        return UserType.from_model(user)

    @strawberry.mutation(description="Delete a user, their completions and their account")
    async def delete_user(self, info: Info[GraphQLContext, None], user_id: str) -> bool:
        ctx = info.context
        await ctx.services.users.delete_user(ctx.identity, user_id)
        return True

    @strawberry.mutation(description="Log a completion for the caller")
    async def create_completion(
        self,
        info: Info[GraphQLContext, None],
        input: CreateCompletionInput,
    ) -> CompletionLogType:
        ctx = info.context
        completion = await ctx.services.completions.create_completion(ctx.identity, input.to_pydantic())
        return CompletionLogType.from_model(completion)

    @strawberry.mutation(description="Delete a completion; userId defaults to the caller")
    async def delete_completion(
        self,
        info: Info[GraphQLContext, None],
        id: str,
        user_id: str | None = None,
    ) -> bool:
        ctx = info.context
        await ctx.services.completions.delete_completion(ctx.identity, id, user_id)
        return True


__all__ = ["Mutation"]
