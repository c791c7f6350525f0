"""User entity."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from habit_service.core.database.documents import DocumentModel


class User(DocumentModel):
    """A user profile keyed by the identity provider's subject id.

    Exposed as ``uid`` in API payloads.
    """

    id: str = Field(alias="uid")
    display_name: str = Field(min_length=1)
    email: str
    role: str = "user"
    locale: str = "en"
    created_at: datetime
