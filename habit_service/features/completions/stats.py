"""Completion statistics.

Pure functions over already fetched completion logs. All calendar
arithmetic is on UTC days; a naive timestamp is read as UTC.

Streak definition:
    A day counts when it has at least one completion. The current streak is
    the run of consecutive counted days ending today, or ending yesterday
    when nothing has been logged today yet. The longest streak is the
    longest such run anywhere in the history.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Any

from habit_service.features.completions.models import CompletionLog, CompletionSource
from habit_service.features.habits.models import Category


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def utc_day(moment: datetime) -> date:
    return as_utc(moment).date()


def start_of_week(now: datetime) -> datetime:
    """Midnight UTC of the Sunday starting ``now``'s week."""
    today = utc_day(now)
    sunday = today - timedelta(days=(today.weekday() + 1) % 7)
    return datetime(sunday.year, sunday.month, sunday.day, tzinfo=UTC)


def start_of_month(now: datetime) -> datetime:
    today = utc_day(now)
    return datetime(today.year, today.month, 1, tzinfo=UTC)


def longest_streak(days: Iterable[date]) -> int:
    """Longest run of consecutive days."""
    longest = run = 0
    previous: date | None = None
    for day in sorted(set(days)):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        longest = max(longest, run)
        previous = day
    return longest


def current_streak(days: Iterable[date], today: date) -> int:
    """Consecutive days ending today, or yesterday if today has none."""
    active = set(days)
    day = today if today in active else today - timedelta(days=1)
    streak = 0
    while day in active:
        streak += 1
        day -= timedelta(days=1)
    return streak


@dataclass(frozen=True, slots=True)
class WindowStats:
    """Completion counts over the last ``days`` days."""

    days: int
    start: datetime
    end: datetime
    total_completions: int = 0
    by_day: dict[str, int] = field(default_factory=dict)
    by_habit: dict[str, int] = field(default_factory=dict)
    by_source: dict[str, int] = field(default_factory=dict)

    @property
    def unique_habits_count(self) -> int:
        return len(self.by_habit)

    def to_api(self) -> dict[str, Any]:
        return {
            "totalCompletions": self.total_completions,
            "uniqueHabitsCount": self.unique_habits_count,
            "completionsByDay": self.by_day,
            "completionsByHabit": self.by_habit,
            "completionsBySource": self.by_source,
            "period": {
                "days": self.days,
                "startDate": self.start.isoformat(),
                "endDate": self.end.isoformat(),
            },
        }


def window_stats(
    logs: Sequence[CompletionLog],
    *,
    days: int,
    start: datetime,
    end: datetime,
) -> WindowStats:
    """Aggregate logs already restricted to the ``[start, end]`` window."""
    by_day = Counter(utc_day(log.completed_at).isoformat() for log in logs)
    by_habit = Counter(log.habit_id for log in logs)
    by_source = {source.value: 0 for source in CompletionSource}
    for log in logs:
        by_source[log.source.value] += 1
    return WindowStats(
        days=days,
        start=start,
        end=end,
        total_completions=len(logs),
        by_day=dict(sorted(by_day.items())),
        by_habit=dict(by_habit),
        by_source=by_source,
    )


@dataclass(frozen=True, slots=True)
class CategoryCount:
    category: Category
    count: int
    percentage: float


@dataclass(frozen=True, slots=True)
class CompletionSummary:
    total_completions: int
    completions_this_week: int
    completions_this_month: int
    current_streak: int
    longest_streak: int
    completions_by_category: list[CategoryCount]
    recent_completions: list[CompletionLog]


def category_breakdown(
    logs: Iterable[CompletionLog],
    categories: Mapping[str, Category],
) -> list[CategoryCount]:
    """Count logs per habit category.

    Logs whose habit is not in ``categories`` are left out, and percentages
    are of the categorised logs only, rounded to one decimal.
    """
    counts = Counter(categories[log.habit_id] for log in logs if log.habit_id in categories)
    total = sum(counts.values())
    return [
        CategoryCount(
            category=category,
            count=counts[category],
            percentage=round(counts[category] * 100 / total, 1),
        )
        for category in Category
        if counts[category]
    ]


def summarize(
    logs: Sequence[CompletionLog],
    categories: Mapping[str, Category],
    *,
    now: datetime,
    recent_limit: int = 10,
) -> CompletionSummary:
    """Build the all-time completion summary for one user."""
    week_start = start_of_week(now)
    month_start = start_of_month(now)
    days = {utc_day(log.completed_at) for log in logs}
    recent = sorted(logs, key=lambda log: as_utc(log.completed_at), reverse=True)[:recent_limit]

    return CompletionSummary(
        total_completions=len(logs),
        completions_this_week=sum(1 for log in logs if as_utc(log.completed_at) >= week_start),
        completions_this_month=sum(1 for log in logs if as_utc(log.completed_at) >= month_start),
        current_streak=current_streak(days, utc_day(now)),
        longest_streak=longest_streak(days),
        completions_by_category=category_breakdown(logs, categories),
        recent_completions=recent,
    )
