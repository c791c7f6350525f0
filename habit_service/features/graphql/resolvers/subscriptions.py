"""Subscription resolvers.

``completionAdded`` is part of the published schema so clients can code
against it, but no event source backs it yet.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import strawberry
from strawberry.types import Info

from habit_service.core.acl import Requirement
from habit_service.core.exceptions import NotImplementedException
from habit_service.features.graphql.context import GraphQLContext
from habit_service.features.graphql.types import CompletionLogType


@strawberry.type(description="Root subscription type")
class Subscription:
    @strawberry.subscription(description="Completions logged by a user (not implemented)")
    async def completion_added(
        self,
        info: Info[GraphQLContext, None],
        user_id: str,
    ) -> AsyncGenerator[CompletionLogType, None]:
        ctx = info.context
        ctx.services.guard.enforce(ctx.identity, user_id, Requirement.OWNER_OR_ELEVATED)
        raise NotImplementedException(
            "completionAdded subscriptions are not implemented",
            extra={"user_id": user_id},
        )
        yield  # unreachable; marks this resolver as an async generator


__all__ = ["Subscription"]
