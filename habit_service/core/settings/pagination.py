"""Pagination settings for API responses.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_HABITS_DEFAULT_LIMIT=25, PAGINATION_BUNDLES_MAX_LIMIT=50
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Per-resource page size defaults and hard limits.

    Requested limits above the maximum are clamped, not rejected.

    Example:
        settings = PaginationSettings()
        limit = min(requested_limit, settings.habits_max_limit)
    """

    habits_default_limit: int = Field(default=50, ge=1, le=1000)
    habits_max_limit: int = Field(default=100, ge=1, le=1000)
    bundles_default_limit: int = Field(default=20, ge=1, le=1000)
    bundles_max_limit: int = Field(default=50, ge=1, le=1000)
    completions_default_limit: int = Field(default=50, ge=1, le=1000)
    completions_max_limit: int = Field(default=100, ge=1, le=1000)
    search_default_limit: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Number of top-priority habits scanned by search",
    )
    search_max_limit: int = Field(default=100, ge=1, le=1000)
    stats_default_days: int = Field(default=30, ge=1, le=365)
    stats_max_days: int = Field(default=365, ge=1, le=3650)
    recent_completions: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of recent completions in completion summaries",
    )

    @model_validator(mode="after")
    def validate_defaults_within_limits(self) -> PaginationSettings:
        """Ensure each default does not exceed its maximum."""
        pairs = (
            ("habits", self.habits_default_limit, self.habits_max_limit),
            ("bundles", self.bundles_default_limit, self.bundles_max_limit),
            ("completions", self.completions_default_limit, self.completions_max_limit),
            ("search", self.search_default_limit, self.search_max_limit),
            ("stats", self.stats_default_days, self.stats_max_days),
        )
        for name, default, maximum in pairs:
            if default > maximum:
                msg = f"{name} default ({default}) exceeds its maximum ({maximum})"
                raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
