"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from habit_service.core.settings import get_app_settings, get_graphql_settings
from habit_service.features.bundles.router import router as bundles_router
from habit_service.features.completions.router import router as completions_router
from habit_service.features.graphql.router import setup_graphql
from habit_service.features.habits.router import router as habits_router
from habit_service.features.health.router import router as health_router
from habit_service.features.users.router import router as users_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from habit_service.core.settings.app import AppSettings
    from habit_service.core.settings.graphql import GraphQLSettings

logger = logging.getLogger(__name__)


def setup_routers(
    app: FastAPI,
    app_settings: AppSettings | None = None,
    graphql_settings: GraphQLSettings | None = None,
) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional override for the API prefix.
        graphql_settings: Optional override controlling GraphQL availability.
    """
    app_settings = app_settings or get_app_settings()
    graphql_settings = graphql_settings or get_graphql_settings()

    api_prefix = app_settings.api_prefix

    # Health stays at /health, outside the API prefix
    app.include_router(health_router)

    app.include_router(habits_router, prefix=api_prefix)
    app.include_router(bundles_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(completions_router, prefix=api_prefix)

    if graphql_settings.enabled:
        setup_graphql(app)
    else:
        logger.info("GraphQL disabled")

    logger.info("Routers configured", extra={"api_prefix": api_prefix})
