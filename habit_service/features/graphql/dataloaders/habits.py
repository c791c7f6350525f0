"""DataLoader for batch-loading habits.

Completion logs reference habits by id. Resolving ``CompletionLog.habit``
for a page of logs would issue one read per log; the loader collects the ids
requested in one tick and resolves them with a single fan-out.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from strawberry.dataloader import DataLoader

if TYPE_CHECKING:
    from habit_service.features.habits.models import Habit
    from habit_service.features.habits.service import HabitService


class HabitDataLoader:
    """Request-scoped loader of habits by id.

    Usage:
        loader = HabitDataLoader(habit_service)
        habit = await loader.load("h1")  # batched with other loads
    """

    def __init__(self, service: HabitService) -> None:
        self._service = service
        self._loader: DataLoader[str, Habit | None] = DataLoader(load_fn=self._batch_load_habits)

    async def _batch_load_habits(self, ids: list[str]) -> list[Habit | None]:
        """Resolve ``ids`` in one fan-out; missing ids map to None."""
        if not ids:
            return []
        habits = {habit.id: habit for habit in await self._service.resolve_habits(ids)}
        return [habits.get(id_) for id_ in ids]

    async def load(self, id_: str) -> Habit | None:
        return await self._loader.load(id_)

    async def load_many(self, ids: list[str]) -> list[Habit | None]:
        return list(await self._loader.load_many(ids))


__all__ = ["HabitDataLoader"]
