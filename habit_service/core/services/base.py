"""Base service class for business logic."""

from __future__ import annotations

import logging

from habit_service.infra.logging import get_lazy_logger


class BaseService:
    """Base class for all service classes.

    Loggers:
        - self.logger: Standard logger for INFO/WARNING/ERROR
        - self._lazy: Lazy logger for DEBUG (zero overhead when DEBUG disabled)

    Example:
        class HabitService(BaseService):
            def __init__(self, store: DocumentStore, guard: AccessGuard):
                super().__init__()
                self.store = store

            async def get(self, habit_id: str) -> Habit:
                self.logger.info("Fetching habit", extra={"habit_id": habit_id})
                ...
    """

    def __init__(self) -> None:
        class_name = self.__class__.__name__
        self.logger = logging.getLogger(class_name)
        self._lazy = get_lazy_logger(class_name)
