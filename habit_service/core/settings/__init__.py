"""Modular Pydantic Settings v2 configuration.

One settings class per domain (app/auth/firestore/graphql/logging/pagination),
each frozen and read from environment variables or a local .env file.

Import settings via cached loaders:
    from habit_service.core.settings import get_app_settings
"""

from __future__ import annotations

from .loader import (
    clear_all_caches,
    get_app_settings,
    get_auth_settings,
    get_firestore_settings,
    get_graphql_settings,
    get_logging_settings,
    get_pagination_settings,
)

__all__ = [
    "clear_all_caches",
    "get_app_settings",
    "get_auth_settings",
    "get_firestore_settings",
    "get_graphql_settings",
    "get_logging_settings",
    "get_pagination_settings",
]
