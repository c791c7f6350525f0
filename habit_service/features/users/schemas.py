"""Request schemas for the users feature."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


class UserCreate(BaseModel):
    """Self-registration payload. The user id is always the caller's."""

    display_name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    role: str | None = Field(default=None, description="Defaults to the standard role")
    locale: str = Field(default="en", min_length=1, max_length=35)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class UserUpdate(BaseModel):
    """Profile changes. Only display name and locale are editable."""

    display_name: str | None = None
    locale: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    @field_validator("display_name", "locale", mode="before")
    @classmethod
    def drop_non_strings(cls, v: Any) -> str | None:
        # Non-string values are not valid fields and are ignored like unknown keys
        return v if isinstance(v, str) else None

    def changes(self) -> dict[str, str]:
        """Stored field updates, skipping unset and empty values."""
        fields = self.model_dump(by_alias=True, exclude_none=True)
        return {key: value for key, value in fields.items() if value}
