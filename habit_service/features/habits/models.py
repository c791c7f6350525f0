"""Habit entity."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from habit_service.core.database.documents import DocumentModel


class Category(StrEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    OCCASIONAL = "occasional"


class TimeWindow(BaseModel):
    """Hours of the day (0-23) in which the habit is suggested."""

    start_hour: int = Field(ge=0, le=23)
    end_hour: int = Field(ge=0, le=23)
    description: str | None = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Habit(DocumentModel):
    """A habit with its scripture reference. Read-only in this service."""

    title: str = Field(min_length=1)
    hadith_arabic: str = ""
    hadith_english: str = ""
    benefits: str = ""
    tags: list[str] = Field(default_factory=list)
    category: Category
    priority: int | float
    context_tags: list[str] = Field(default_factory=list)
    life_event: str | None = None
    time_window: TimeWindow | None = None
    created_at: datetime | None = None

    @field_validator("tags")
    @classmethod
    def unique_tags(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(v))

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title, benefits and tags."""
        needle = term.casefold()
        return (
            needle in self.title.casefold()
            or needle in self.benefits.casefold()
            or any(needle in tag.casefold() for tag in self.tags)
        )
