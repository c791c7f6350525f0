"""Service layer for the completions feature."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from habit_service.core.acl import Requirement
from habit_service.core.database import PageRequest, QueryBuilder, fetch_page
from habit_service.core.database.documents import completion_log_path
from habit_service.core.exceptions import InvalidInputException, NotFoundException
from habit_service.core.services.base import BaseService
from habit_service.features.completions import stats
from habit_service.features.completions.models import CompletionLog, CompletionSource
from habit_service.features.completions.schemas import CompletionFilter

if TYPE_CHECKING:
    from habit_service.core.acl import AccessGuard
    from habit_service.core.pagination import Connection
    from habit_service.core.schemas.auth import Identity
    from habit_service.core.settings.pagination import PaginationSettings
    from habit_service.features.completions.schemas import CompletionCreate
    from habit_service.features.habits.service import HabitService
    from habit_service.infra.firestore import Document, DocumentStore

_SOURCES = tuple(source.value for source in CompletionSource)


class CompletionService(BaseService):
    """Per-user completion log: logging, listing, deletion and statistics.

    Completions are created only by their owner acting as themselves. Every
    other operation is open to the owner and to elevated roles.
    """

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

    async def create_completion(self, identity: Identity | None, payload: CompletionCreate) -> CompletionLog:
        """Log a completion of an existing habit for the caller.

        Raises:
            UnauthorizedException: No caller.
            InvalidInputException: Missing habitId or unknown source.
            NotFoundException: The habit does not exist.
        """
        caller = self.guard.enforce(identity, None, Requirement.AUTHENTICATED)

        habit_id = payload.habit_id
        if not isinstance(habit_id, str) or not habit_id.strip():
            raise InvalidInputException("habitId is required", extra={"field": "habitId"})
        source = CompletionSource.API if payload.source is None else payload.source
        if source not in _SOURCES:
            raise InvalidInputException(
                'source must be either "checklist" or "api"',
                extra={"field": "source"},
            )
        note = payload.note
        if note is not None and not isinstance(note, str):
            raise InvalidInputException("note must be a string", extra={"field": "note"})

        if await self.habits.find_habit(habit_id) is None:
            raise NotFoundException("Habit not found", type="habit-not-found", extra={"habit_id": habit_id})

        data = {
            "habitId": habit_id,
            "completedAt": datetime.now(UTC),
            "source": str(source),
        }
        if note:
            data["note"] = note
        completion_id = await self.store.add(completion_log_path(caller.id), data)
        completion = CompletionLog.model_validate({**data, "id": completion_id, "user_id": caller.id})

        self.logger.info(
            "Completion logged",
            extra={
                "user_id": caller.id,
                "habit_id": habit_id,
                "completion_id": completion_id,
                "operation": "service.create_completion",
            },
        )
        return completion

    async def list_completions(
        self,
        identity: Identity | None,
        user_id: str,
        filters: CompletionFilter | None = None,
        *,
        limit: int | None = None,
        after: str | None = None,
        offset: int = 0,
    ) -> Connection[CompletionLog]:
        """List a user's completions, newest first.

        Raises:
            InvalidInputException: startDate after endDate, limit below 1 or
                negative offset.
        """
        self.guard.enforce(identity, user_id, Requirement.OWNER_OR_ELEVATED)
        filters = filters or CompletionFilter()
        if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            raise InvalidInputException("startDate must not be after endDate")

        page = PageRequest.clamped(
            limit,
            default=self.pagination.completions_default_limit,
            maximum=self.pagination.completions_max_limit,
            after=after,
            offset=offset,
        )
        builder = (
            QueryBuilder(completion_log_path(user_id))
            .where_equal("habitId", filters.habit_id)
            .where_range("completedAt", gte=filters.start_date, lte=filters.end_date)
            .order_by("completedAt", descending=True)
        )
        connection = await fetch_page(self.store, builder, page)
        return connection.map(lambda doc: self._decode(doc, user_id))

    async def delete_completion(
        self,
        identity: Identity | None,
        completion_id: str,
        user_id: str | None = None,
    ) -> None:
        """Delete one completion; ``user_id`` defaults to the caller.

        Raises:
            NotFoundException: No such completion for the user.
        """
        caller = self.guard.enforce(identity, None, Requirement.AUTHENTICATED)
        owner_id = user_id or caller.id
        self.guard.enforce(identity, owner_id, Requirement.OWNER_OR_ELEVATED)

        log_path = completion_log_path(owner_id)
        if await self.store.get(log_path, completion_id) is None:
            raise NotFoundException(
                "Completion log entry not found",
                type="completion-not-found",
                extra={"user_id": owner_id, "completion_id": completion_id},
            )
        await self.store.delete(log_path, completion_id)

        self.logger.info(
            "Completion deleted",
            extra={"user_id": owner_id, "completion_id": completion_id, "operation": "service.delete_completion"},
        )

    async def completion_stats(
        self,
        identity: Identity | None,
        user_id: str,
        days: int | None = None,
    ) -> stats.WindowStats:
        """Counts over the last ``days`` days (default 30, capped at 365).

        Raises:
            InvalidInputException: days below 1.
        """
        self.guard.enforce(identity, user_id, Requirement.OWNER_OR_ELEVATED)
        window = self.pagination.stats_default_days if days is None else days
        if window < 1:
            raise InvalidInputException("days must be at least 1", extra={"days": days})
        window = min(window, self.pagination.stats_max_days)

        end = datetime.now(UTC)
        start = end - timedelta(days=window)
        spec = QueryBuilder(completion_log_path(user_id)).where_range("completedAt", gte=start).build()
        logs = [self._decode(doc, user_id) for doc in await self.store.query(spec)]
        return stats.window_stats(logs, days=window, start=start, end=end)

    async def completion_summary(self, identity: Identity | None, user_id: str) -> stats.CompletionSummary:
        """All-time totals, streaks and category breakdown for a user."""
        self.guard.enforce(identity, user_id, Requirement.OWNER_OR_ELEVATED)

        spec = QueryBuilder(completion_log_path(user_id)).order_by("completedAt", descending=True).build()
        logs = [self._decode(doc, user_id) for doc in await self.store.query(spec)]
        habits = await self.habits.resolve_habits([log.habit_id for log in logs])
        categories = {habit.id: habit.category for habit in habits}

        summary = stats.summarize(
            logs,
            categories,
            now=datetime.now(UTC),
            recent_limit=self.pagination.recent_completions,
        )
        self._lazy.debug(
            lambda: f"service.completion_summary({user_id}) -> {summary.total_completions} logs, "
            f"streak {summary.current_streak}/{summary.longest_streak}"
        )
        return summary

    @staticmethod
    def _decode(document: Document, user_id: str) -> CompletionLog:
        return CompletionLog.from_document(document, user_id=user_id)
