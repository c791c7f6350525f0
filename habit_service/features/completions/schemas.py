"""Request schemas for the completions feature."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CompletionCreate(BaseModel):
    """Payload for logging a completion.

    Fields are deliberately loose so the service can report missing or
    unknown values with its own messages instead of a generic schema error.
    """

    habit_id: Any = None
    source: Any = None
    note: Any = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CompletionFilter(BaseModel):
    """Filters for listing a user's completions.

    Naive datetimes are taken as UTC.
    """

    habit_id: str | None = Field(default=None, description="Exact habit id")
    start_date: datetime | None = Field(default=None, description="Inclusive lower bound")
    end_date: datetime | None = Field(default=None, description="Inclusive upper bound")

    model_config = ConfigDict(frozen=True)

    @field_validator("start_date", "end_date")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v
