"""Application lifespan management.

Startup:
1. Logging
2. Document store and identity provider, unless ``create_app`` was handed
   ready-made ones (tests, CLI)
3. Service graph on ``app.state.services``

Shutdown flushes the log queue.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from habit_service.core.dependencies.services import build_services
from habit_service.core.settings import (
    get_app_settings,
    get_auth_settings,
    get_firestore_settings,
    get_logging_settings,
    get_pagination_settings,
)
from habit_service.infra.auth import create_identity_provider
from habit_service.infra.firestore import create_document_store
from habit_service.infra.logging import setup_logging, shutdown

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


def _startup_services(app: FastAPI) -> None:
    if getattr(app.state, "services", None) is not None:
        logger.debug("Using services provided at app creation")
        return

    firestore_settings = get_firestore_settings()
    store = create_document_store(firestore_settings)
    identity_provider = create_identity_provider(get_auth_settings())
    app.state.services = build_services(
        store,
        identity_provider,
        auth=get_auth_settings(),
        pagination=get_pagination_settings(),
    )
    logger.info("Services initialized", extra={"store_backend": firestore_settings.backend})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop application resources."""
    settings = get_app_settings()
    setup_logging(get_logging_settings())
    logger.info(
        "Application starting",
        extra={
            "service": settings.service_name,
            "environment": settings.environment,
            "version": settings.version,
        },
    )

    _startup_services(app)

    try:
        yield
    finally:
        logger.info("Application shutting down", extra={"service": settings.service_name})
        shutdown()
