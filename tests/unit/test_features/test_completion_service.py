"""Unit tests for CompletionService."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from habit_service.core.exceptions import (
    ForbiddenException,
    InvalidInputException,
    NotFoundException,
    UnauthorizedException,
)
from habit_service.features.completions.models import CompletionSource
from habit_service.features.completions.schemas import CompletionCreate, CompletionFilter
from habit_service.features.habits.models import Category

ALICE_LOG = "users/alice/completion_log"


@pytest.fixture
def now() -> datetime:
    return datetime.now(UTC)


@pytest.fixture
def alice_logs(store, now):
    """Four completions: today (h1, h2), two days ago (h1), and one for a deleted habit."""
    entries = {
        "c1": {"habitId": "h1", "completedAt": now - timedelta(seconds=1), "source": "checklist"},
        "c2": {"habitId": "h2", "completedAt": now - timedelta(seconds=2), "source": "api", "note": "late"},
        "c3": {"habitId": "h1", "completedAt": now - timedelta(days=2), "source": "api"},
        "c4": {"habitId": "gone", "completedAt": now - timedelta(days=40), "source": "api"},
    }
    for completion_id, data in entries.items():
        store.put(ALICE_LOG, completion_id, data)
    return entries


class TestCreateCompletion:
    @pytest.mark.asyncio
    async def test_source_defaults_to_api(self, services, store, alice):
        completion = await services.completions.create_completion(alice, CompletionCreate(habit_id="h1"))

        assert completion.source is CompletionSource.API
        assert completion.habit_id == "h1"
        assert completion.user_id == "alice"
        stored = store.snapshot(ALICE_LOG)[completion.id]
        assert stored["source"] == "api"
        assert "note" not in stored

    @pytest.mark.asyncio
    async def test_checklist_with_note(self, services, alice):
        payload = CompletionCreate.model_validate({"habitId": "h2", "source": "checklist", "note": "after isha"})

        completion = await services.completions.create_completion(alice, payload)

        assert completion.source is CompletionSource.CHECKLIST
        assert completion.note == "after isha"
        assert "userId" not in completion.to_api()

    @pytest.mark.asyncio
    async def test_invalid_source(self, services, alice):
        with pytest.raises(InvalidInputException, match='source must be either "checklist" or "api"'):
            await services.completions.create_completion(alice, CompletionCreate(habit_id="h1", source="invalid"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("habit_id", [None, "", "   ", 42])
    async def test_habit_id_required(self, services, alice, habit_id):
        with pytest.raises(InvalidInputException, match="habitId is required"):
            await services.completions.create_completion(alice, CompletionCreate(habit_id=habit_id))

    @pytest.mark.asyncio
    async def test_unknown_habit(self, services, store, alice):
        with pytest.raises(NotFoundException, match="Habit not found"):
            await services.completions.create_completion(alice, CompletionCreate(habit_id="nope"))

        assert store.snapshot(ALICE_LOG) == {}

    @pytest.mark.asyncio
    async def test_note_must_be_text(self, services, alice):
        with pytest.raises(InvalidInputException, match="note must be a string"):
            await services.completions.create_completion(alice, CompletionCreate(habit_id="h1", note=["x"]))

    @pytest.mark.asyncio
    async def test_requires_caller(self, services):
        with pytest.raises(UnauthorizedException):
            await services.completions.create_completion(None, CompletionCreate(habit_id="h1"))


class TestListCompletions:
    @pytest.mark.asyncio
    async def test_newest_first(self, services, alice, alice_logs):
        page = await services.completions.list_completions(alice, "alice")

        assert [log.id for log in page.nodes] == ["c1", "c2", "c3", "c4"]
        assert page.total_count == 4

    @pytest.mark.asyncio
    async def test_habit_filter(self, services, alice, alice_logs):
        page = await services.completions.list_completions(alice, "alice", CompletionFilter(habit_id="h1"))

        assert [log.id for log in page.nodes] == ["c1", "c3"]

    @pytest.mark.asyncio
    async def test_date_range(self, services, alice, alice_logs, now):
        filters = CompletionFilter(start_date=now - timedelta(days=3), end_date=now - timedelta(days=1))

        page = await services.completions.list_completions(alice, "alice", filters)

        assert [log.id for log in page.nodes] == ["c3"]
        assert page.total_count == 1

    def test_naive_dates_are_utc(self):
        filters = CompletionFilter(start_date=datetime(2024, 1, 1))

        assert filters.start_date.tzinfo is UTC

    @pytest.mark.asyncio
    async def test_inverted_range_rejected(self, services, alice, now):
        filters = CompletionFilter(start_date=now, end_date=now - timedelta(days=1))

        with pytest.raises(InvalidInputException):
            await services.completions.list_completions(alice, "alice", filters)

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, services, bob, alice_logs):
        with pytest.raises(ForbiddenException):
            await services.completions.list_completions(bob, "alice")

    @pytest.mark.asyncio
    async def test_coach_can_list(self, services, coach, alice_logs):
        page = await services.completions.list_completions(coach, "alice", limit=2)

        assert len(page.edges) == 2
        assert page.page_info.has_next_page is True


class TestDeleteCompletion:
    @pytest.mark.asyncio
    async def test_defaults_to_caller(self, services, store, alice, alice_logs):
        await services.completions.delete_completion(alice, "c1")

        assert "c1" not in store.snapshot(ALICE_LOG)

    @pytest.mark.asyncio
    async def test_unknown_completion(self, services, alice):
        with pytest.raises(NotFoundException, match="Completion log entry not found"):
            await services.completions.delete_completion(alice, "nope")

    @pytest.mark.asyncio
    async def test_other_users_log_forbidden(self, services, bob, alice_logs):
        with pytest.raises(ForbiddenException):
            await services.completions.delete_completion(bob, "c1", "alice")


class TestCompletionStats:
    @pytest.mark.asyncio
    async def test_window_counts(self, services, alice, alice_logs, now):
        result = await services.completions.completion_stats(alice, "alice", 30)
        data = result.to_api()

        assert data["totalCompletions"] == 3
        assert data["uniqueHabitsCount"] == 2
        assert data["completionsByHabit"] == {"h1": 2, "h2": 1}
        assert data["completionsBySource"] == {"checklist": 1, "api": 2}
        assert data["period"]["days"] == 30
        assert sum(data["completionsByDay"].values()) == 3

    @pytest.mark.asyncio
    async def test_days_default_and_cap(self, services, alice, alice_logs):
        assert (await services.completions.completion_stats(alice, "alice")).days == 30
        capped = await services.completions.completion_stats(alice, "alice", 1000)
        assert capped.days == 365
        assert capped.total_completions == 4

    @pytest.mark.asyncio
    async def test_days_below_one(self, services, alice):
        with pytest.raises(InvalidInputException):
            await services.completions.completion_stats(alice, "alice", 0)

    @pytest.mark.asyncio
    async def test_summary(self, services, alice, alice_logs):
        summary = await services.completions.completion_summary(alice, "alice")

        assert summary.total_completions == 4
        assert summary.current_streak == 1
        assert summary.longest_streak == 1
        # the log of the deleted habit is not categorised
        by_category = {entry.category: (entry.count, entry.percentage) for entry in summary.completions_by_category}
        assert by_category == {Category.DAILY: (3, 100.0)}
        assert [log.id for log in summary.recent_completions] == ["c1", "c2", "c3", "c4"]
