"""Service layer for the habits feature."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from habit_service.core.acl import Requirement
from habit_service.core.database import FanoutResolver, PageRequest, QueryBuilder, fetch_page
from habit_service.core.database.documents import HABITS
from habit_service.core.exceptions import InvalidInputException, NotFoundException
from habit_service.core.services.base import BaseService
from habit_service.features.habits.models import Habit
from habit_service.features.habits.schemas import HabitFilter

if TYPE_CHECKING:
    from habit_service.core.acl import AccessGuard
    from habit_service.core.pagination import Connection
    from habit_service.core.schemas.auth import Identity
    from habit_service.core.settings.pagination import PaginationSettings
    from habit_service.infra.firestore import DocumentStore

MIN_SEARCH_LENGTH = 2


class HabitService(BaseService):
    """Read access to the habit catalogue.

    Every operation requires an authenticated caller.
    """

    def __init__(
        self,
        store: DocumentStore,
        guard: AccessGuard,
        pagination: PaginationSettings,
        fanout: FanoutResolver | None = None,
    ) -> None:
        super().__init__()
        self.store = store
        self.guard = guard
        self.pagination = pagination
        self.fanout = fanout or FanoutResolver(store)

    async def list_habits(
        self,
        identity: Identity | None,
        filters: HabitFilter | None = None,
        *,
        limit: int | None = None,
        after: str | None = None,
        offset: int = 0,
    ) -> Connection[Habit]:
        """List habits by priority, highest first.

        Args:
            identity: The caller.
            filters: Optional category and tag filters.
            limit: Page size; defaulted and capped by pagination settings.
            after: Cursor of the last habit already seen.
            offset: Habits to skip (REST paging).

        Raises:
            UnauthorizedException: No caller.
            InvalidInputException: limit below 1 or negative offset.
        """
        self.guard.enforce(identity, None, Requirement.AUTHENTICATED)
        filters = filters or HabitFilter()
        page = PageRequest.clamped(
            limit,
            default=self.pagination.habits_default_limit,
            maximum=self.pagination.habits_max_limit,
            after=after,
            offset=offset,
        )
        builder = (
            QueryBuilder(HABITS)
            .where_equal("category", filters.category)
            .where_array_contains_any("tags", filters.tags)
            .order_by("priority", descending=True)
        )
        connection = await fetch_page(self.store, builder, page)
        return connection.map(Habit.from_document)

    async def get_habit(self, identity: Identity | None, habit_id: str) -> Habit:
        """Fetch one habit.

        Raises:
            UnauthorizedException: No caller.
            NotFoundException: Unknown habit id.
        """
        self.guard.enforce(identity, None, Requirement.AUTHENTICATED)
        habit = await self.find_habit(habit_id)
        if habit is None:
            raise NotFoundException("Habit not found", type="habit-not-found", extra={"habit_id": habit_id})
        return habit

    async def find_habit(self, habit_id: str) -> Habit | None:
        """Fetch one habit without an access check, None when absent."""
        document = await self.store.get(HABITS, habit_id)
        if document is None:
            return None
        return Habit.from_document(document)

    async def search_habits(
        self,
        identity: Identity | None,
        term: str,
        limit: int | None = None,
    ) -> list[Habit]:
        """Substring search over the top ``limit`` habits by priority.

        Only the fetched habits are scanned, so a habit ranked below the
        limit is never returned even when it matches.

        Raises:
            UnauthorizedException: No caller.
            InvalidInputException: Term shorter than two characters or limit
                below 1.
        """
        self.guard.enforce(identity, None, Requirement.AUTHENTICATED)
        needle = (term or "").strip()
        if len(needle) < MIN_SEARCH_LENGTH:
            raise InvalidInputException(
                "Search query must be at least 2 characters",
                extra={"query": term},
            )
        page = PageRequest.clamped(
            limit,
            default=self.pagination.search_default_limit,
            maximum=self.pagination.search_max_limit,
        )
        spec = QueryBuilder(HABITS).order_by("priority", descending=True).limit(page.size).build()
        documents = await self.store.query(spec)
        matches = [habit for habit in map(Habit.from_document, documents) if habit.matches(needle)]

        self._lazy.debug(
            lambda: f"service.search_habits({needle!r}) scanned {len(documents)} -> {len(matches)}"
        )
        return matches

    async def resolve_habits(self, habit_ids: Sequence[str]) -> list[Habit]:
        """Resolve ids to habits in input order, dropping unknown ids.

        No access check; callers have already authorized the owning resource.
        """
        documents = await self.fanout.resolve(HABITS, habit_ids)
        return [Habit.from_document(document) for document in documents]
