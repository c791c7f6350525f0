"""Document store settings.

Environment variables use FIRESTORE_ prefix.
Example: FIRESTORE_BACKEND=memory, FIRESTORE_EMULATOR_HOST=localhost:8080
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

StoreBackend = Literal["firestore", "memory"]


class FirestoreSettings(BaseSettings):
    """Firestore connection configuration."""

    backend: StoreBackend = Field(
        default="firestore",
        description="Store implementation: firestore, or memory for local runs",
    )
    project_id: str | None = Field(
        default=None,
        description="Google Cloud project (defaults to the ambient credentials' project)",
    )
    database: str | None = Field(
        default=None,
        description="Named Firestore database; None uses '(default)'",
    )
    emulator_host: str | None = Field(
        default=None,
        description="host:port of a Firestore emulator",
    )

    model_config = SettingsConfigDict(
        env_prefix="FIRESTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
