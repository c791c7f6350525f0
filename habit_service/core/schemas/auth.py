"""Authenticated identity schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class VerifiedToken(BaseModel):
    """Result of verifying a bearer token with the identity provider.

    Attributes:
        uid: Subject id of the account.
        email: Email on the account, if any.
        claims: Full decoded claim set, including custom claims.
    """

    uid: str = Field(min_length=1)
    email: str | None = None
    claims: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class Identity(BaseModel):
    """The caller of a request, resolved once per request.

    Access checks only ever see this record, never raw token claims.

    Example:
        identity = Identity(id="u1", email="u1@example.com", role="user")
    """

    id: str = Field(min_length=1, description="Auth subject id, also the user document id")
    email: str | None = Field(default=None, description="Account email")
    role: str = Field(default="user", min_length=1, description="Resolved role")

    model_config = ConfigDict(frozen=True)
