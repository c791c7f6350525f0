"""FastAPI application entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI

from habit_service.app.exception_handlers import configure_exception_handlers
from habit_service.app.lifespan import lifespan
from habit_service.app.middleware import configure_middleware
from habit_service.app.router import setup_routers
from habit_service.core.dependencies.services import build_services
from habit_service.core.settings import (
    get_app_settings,
    get_auth_settings,
    get_pagination_settings,
)

if TYPE_CHECKING:
    from habit_service.infra.auth import IdentityProvider
    from habit_service.infra.firestore import DocumentStore


def create_app(
    store: DocumentStore | None = None,
    identity_provider: IdentityProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Document store to serve from. Built from settings at startup
            when omitted.
        identity_provider: Token verifier and account manager. Built from
            settings at startup when omitted.

    Both must be given together to bypass startup wiring.
    """
    settings = get_app_settings()

    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version=settings.version,
        docs_url=settings.get_docs_url(),
        openapi_url=settings.get_openapi_url(),
        debug=settings.debug,
        lifespan=lifespan,
    )

    if store is not None and identity_provider is not None:
        app.state.services = build_services(
            store,
            identity_provider,
            auth=get_auth_settings(),
            pagination=get_pagination_settings(),
        )

    configure_exception_handlers(app)
    configure_middleware(app, settings)
    setup_routers(app, settings)

    return app


app = create_app()
