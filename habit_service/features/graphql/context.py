"""GraphQL context for request-scoped dependencies.

Created fresh for each GraphQL request. Carries the service container, the
caller's identity (None when anonymous) and the request's DataLoaders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from habit_service.core.dependencies.services import ServiceContainer
    from habit_service.core.schemas.auth import Identity
    from habit_service.features.graphql.dataloaders import DataLoaders


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Example usage in resolver:
        @strawberry.field
        async def habit(self, info: Info[GraphQLContext, None], id: str) -> HabitType | None:
            ctx = info.context
            habit = await ctx.services.habits.get_habit(ctx.identity, id)
            return HabitType.from_model(habit)
    """

    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    services: ServiceContainer = field(default=None)  # type: ignore[assignment]
    loaders: DataLoaders = field(default=None)  # type: ignore[assignment]
    identity: Identity | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None


__all__ = ["GraphQLContext"]
