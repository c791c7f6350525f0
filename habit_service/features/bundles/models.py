"""Bundle entity."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from habit_service.core.database.documents import DocumentModel


class Bundle(DocumentModel):
    """A curated, ordered group of habits.

    ``habit_ids`` order is the presentation order. Ids may refer to habits
    that no longer exist; resolution drops them.
    """

    name: str = Field(min_length=1)
    description: str = ""
    habit_ids: list[str] = Field(default_factory=list)
    thumbnail_url: str | None = None
    display_order: int = 0
    created_at: datetime | None = None
