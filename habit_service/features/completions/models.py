"""Completion log entity."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from habit_service.core.database.documents import DocumentModel


class CompletionSource(StrEnum):
    CHECKLIST = "checklist"
    API = "api"


class CompletionLog(DocumentModel):
    """One completion of a habit, stored under the owning user.

    ``habit_id`` was checked at creation only and may no longer resolve.
    ``user_id`` comes from the document path and is not stored or exposed.
    """

    user_id: str = Field(exclude=True)
    habit_id: str = Field(min_length=1)
    completed_at: datetime
    source: CompletionSource = CompletionSource.API
    note: str | None = None
