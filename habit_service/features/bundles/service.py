"""Service layer for the bundles feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from habit_service.core.acl import Requirement
from habit_service.core.database import PageRequest, QueryBuilder, fetch_page
from habit_service.core.database.documents import BUNDLES
from habit_service.core.exceptions import NotFoundException
from habit_service.core.services.base import BaseService
from habit_service.features.bundles.models import Bundle

if TYPE_CHECKING:
    from habit_service.core.acl import AccessGuard
    from habit_service.core.pagination import Connection
    from habit_service.core.schemas.auth import Identity
    from habit_service.core.settings.pagination import PaginationSettings
    from habit_service.features.habits.models import Habit
    from habit_service.features.habits.service import HabitService
    from habit_service.infra.firestore import DocumentStore


class BundleService(BaseService):
    """Read access to habit bundles and their ordered habits."""

    def __init__(
        self,
        store: DocumentStore,
        guard: AccessGuard,
        pagination: PaginationSettings,
        habits: HabitService,
    ) -> None:
        super().__init__()
        self.store = store
        self.guard = guard
        self.pagination = pagination
        self.habits = habits

    async def list_bundles(
        self,
        identity: Identity | None,
        *,
        limit: int | None = None,
        after: str | None = None,
        offset: int = 0,
    ) -> Connection[Bundle]:
        """List bundles by display order, ascending."""
        self.guard.enforce(identity, None, Requirement.AUTHENTICATED)
        page = PageRequest.clamped(
            limit,
            default=self.pagination.bundles_default_limit,
            maximum=self.pagination.bundles_max_limit,
            after=after,
            offset=offset,
        )
        builder = QueryBuilder(BUNDLES).order_by("displayOrder")
        connection = await fetch_page(self.store, builder, page)
        return connection.map(Bundle.from_document)

    async def get_bundle(self, identity: Identity | None, bundle_id: str) -> Bundle:
        """Fetch one bundle.

        Raises:
            UnauthorizedException: No caller.
            NotFoundException: Unknown bundle id.
        """
        self.guard.enforce(identity, None, Requirement.AUTHENTICATED)
        document = await self.store.get(BUNDLES, bundle_id)
        if document is None:
            raise NotFoundException(
                "Bundle not found",
                type="bundle-not-found",
                extra={"bundle_id": bundle_id},
            )
        return Bundle.from_document(document)

    async def list_bundle_habits(self, identity: Identity | None, bundle_id: str) -> list[Habit]:
        """Habits of a bundle in the bundle's order, skipping missing habits.

        Raises:
            UnauthorizedException: No caller.
            NotFoundException: Unknown bundle id.
        """
        bundle = await self.get_bundle(identity, bundle_id)
        return await self.habits_of(bundle)

    async def habits_of(self, bundle: Bundle) -> list[Habit]:
        """Resolve an already authorized bundle's habits."""
        habits = await self.habits.resolve_habits(bundle.habit_ids)
        if len(habits) < len(set(bundle.habit_ids)):
            self._lazy.debug(
                lambda: f"Bundle {bundle.id} has {len(set(bundle.habit_ids)) - len(habits)} dangling habit ids"
            )
        return habits
