"""GraphQL router for FastAPI integration.

Provides:
- the GraphQL endpoint at ``GRAPHQL_PATH`` (POST; GET serves the explorer
  outside production)
- the request context with services, identity and DataLoaders
- a 405 answer for non-POST requests in production
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, cast

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from strawberry.fastapi import GraphQLRouter

from habit_service.core.dependencies.auth import bearer_scheme
from habit_service.core.dependencies.services import get_services
from habit_service.core.schemas.envelope import fail
from habit_service.core.settings import get_app_settings, get_graphql_settings
from habit_service.features.graphql.context import GraphQLContext
from habit_service.features.graphql.dataloaders import create_dataloaders
from habit_service.features.graphql.schema import schema
from habit_service.infra.auth import InvalidTokenError

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed. Use POST for GraphQL queries."


async def get_graphql_context(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> GraphQLContext:
    """Build the per-request context.

    A rejected token leaves the request anonymous; resolvers that need a
    caller then report UNAUTHENTICATED.
    """
    services = get_services(request)
    identity = None
    if credentials is not None and credentials.credentials:
        try:
            identity = await services.identities.resolve(credentials.credentials)
        except InvalidTokenError as e:
            logger.warning("Bearer token rejected", extra={"error": str(e), "transport": "graphql"})

    return GraphQLContext(
        services=services,
        loaders=create_dataloaders(services),
        identity=identity,
    )


async def method_not_allowed() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content=fail("Method not allowed", METHOD_NOT_ALLOWED_MESSAGE),
        headers={"Allow": "POST"},
    )


def create_graphql_router(*, production: bool) -> GraphQLRouter:
    """Create the strawberry router for the configured path."""
    settings = get_graphql_settings()
    return GraphQLRouter(
        schema,
        path=settings.path,
        context_getter=cast("Any", get_graphql_context),
        graphql_ide=None if production else (settings.graphql_ide or None),
        allow_queries_via_get=not production,
    )


def setup_graphql(app: FastAPI) -> None:
    """Mount GraphQL on ``app``.

    In production, every non-POST request to the endpoint gets 405. That
    route is registered first so it wins over the strawberry GET route.
    """
    settings = get_graphql_settings()
    production = get_app_settings().is_production
    if production:
        app.add_api_route(
            settings.path,
            method_not_allowed,
            methods=["GET", "PUT", "PATCH", "DELETE"],
            include_in_schema=False,
        )
    app.include_router(create_graphql_router(production=production), tags=["graphql"])
    logger.info("GraphQL mounted", extra={"path": settings.path, "ide": not production})


__all__ = ["create_graphql_router", "get_graphql_context", "setup_graphql"]
