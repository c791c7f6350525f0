"""Authentication and authorization settings.

Environment variables use AUTH_ prefix.
Example: AUTH_ELEVATED_ROLES='["coach"]', AUTH_CHECK_REVOKED=true
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Identity provider and access policy configuration.

    Attributes:
        elevated_roles: Roles granted cross-user read/write access.
        default_role: Role assigned when neither the token nor the user
            document carries one.
        known_roles: Roles a user document may hold.
    """

    elevated_roles: frozenset[str] = Field(
        default=frozenset({"coach"}),
        description="Roles allowed to act on other users' resources",
    )
    default_role: str = Field(
        default="user",
        min_length=1,
        description="Role assigned to new and unclassified users",
    )
    known_roles: frozenset[str] = Field(
        default=frozenset({"user", "coach"}),
        description="Roles recognised on user documents and token claims",
    )
    role_claim: str = Field(
        default="role",
        min_length=1,
        description="Custom token claim carrying the user's role",
    )

    # Identity provider (Firebase Authentication)
    project_id: str | None = Field(
        default=None,
        description="Firebase project ID (falls back to application default credentials)",
    )
    credentials_file: Path | None = Field(
        default=None,
        description="Path to a service account JSON file",
    )
    check_revoked: bool = Field(
        default=False,
        description="Reject tokens revoked since issue (extra round trip)",
    )
    clock_skew_seconds: int = Field(
        default=10,
        ge=0,
        le=60,
        description="Tolerated clock skew when verifying token timestamps",
    )

    @model_validator(mode="after")
    def validate_roles(self) -> AuthSettings:
        """Ensure the configured roles are consistent."""
        if self.default_role not in self.known_roles:
            msg = f"default_role {self.default_role!r} must be one of known_roles"
            raise ValueError(msg)
        if self.default_role in self.elevated_roles:
            msg = "default_role cannot be an elevated role"
            raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
