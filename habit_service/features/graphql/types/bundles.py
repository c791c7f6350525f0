"""GraphQL types for bundles."""

from __future__ import annotations

from datetime import datetime

import strawberry
from strawberry.types import Info

from habit_service.core.pagination import Connection
from habit_service.features.bundles.models import Bundle
from habit_service.features.graphql.context import GraphQLContext
from habit_service.features.graphql.types.base import PageInfoType
from habit_service.features.graphql.types.habits import HabitType


@strawberry.type(name="Bundle", description="A curated, ordered group of habits")
class BundleType:
    id: str
    name: str
    description: str
    habit_ids: list[str]
    thumbnail_url: str | None = None
    display_order: int = 0
    created_at: datetime | None = None

    _model: strawberry.Private[Bundle | None] = None

    @strawberry.field(description="Habits in bundle order; ids that no longer resolve are left out")
    async def habits(self, info: Info[GraphQLContext, None]) -> list[HabitType]:
        habits = await info.context.services.bundles.habits_of(self._model)
        return [HabitType.from_model(habit) for habit in habits]

    @classmethod
    def from_model(cls, bundle: Bundle) -> BundleType:
        return cls(
            id=bundle.id,
            name=bundle.name,
            description=bundle.description,
            habit_ids=list(bundle.habit_ids),
            thumbnail_url=bundle.thumbnail_url,
            display_order=bundle.display_order,
            created_at=bundle.created_at,
            _model=bundle,
        )


@strawberry.type(name="BundleEdge")
class BundleEdge:
    node: BundleType
    cursor: str


@strawberry.type(name="BundlesConnection")
class BundleConnection:
    edges: list[BundleEdge]
    page_info: PageInfoType
    total_count: int

    @classmethod
    def from_connection(cls, connection: Connection[Bundle]) -> BundleConnection:
        return cls(
            edges=[BundleEdge(node=BundleType.from_model(edge.node), cursor=edge.cursor) for edge in connection.edges],
            page_info=PageInfoType.from_model(connection.page_info),
            total_count=connection.total_count,
        )


__all__ = ["BundleConnection", "BundleEdge", "BundleType"]
