"""Request schemas for the habits feature."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from habit_service.features.habits.models import Category


class HabitFilter(BaseModel):
    """Filters for listing habits.

    ``tags`` matches habits sharing at least one tag; only the first 10
    distinct tags are applied.
    """

    category: Category | None = Field(default=None, description="Exact category")
    tags: list[str] = Field(default_factory=list, description="Any of these tags")

    model_config = ConfigDict(frozen=True)
