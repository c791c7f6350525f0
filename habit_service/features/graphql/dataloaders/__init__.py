"""Request-scoped DataLoaders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from habit_service.features.graphql.dataloaders.habits import HabitDataLoader

if TYPE_CHECKING:
    from habit_service.core.dependencies.services import ServiceContainer


@dataclass
class DataLoaders:
    """All DataLoaders of one request."""

    habits: HabitDataLoader


def create_dataloaders(services: ServiceContainer) -> DataLoaders:
    return DataLoaders(habits=HabitDataLoader(services.habits))


__all__ = ["DataLoaders", "HabitDataLoader", "create_dataloaders"]
