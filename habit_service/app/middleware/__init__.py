"""Middleware configuration for the FastAPI application.

The stack, outermost first:
- CORS: only when ``APP_CORS_ORIGINS`` is set
- Request ID: request tracking and log context
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

from habit_service.app.middleware.request_id import RequestIDMiddleware
from habit_service.core.settings import get_app_settings

if TYPE_CHECKING:
    from fastapi import FastAPI

    from habit_service.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def configure_middleware(app: FastAPI, settings: AppSettings | None = None) -> None:
    """Install the middleware stack on ``app``.

    ``add_middleware`` prepends, so the last one added runs first.
    """
    settings = settings or get_app_settings()

    app.add_middleware(RequestIDMiddleware)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=settings.cors_allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID"],
        )
        logger.info("CORS enabled", extra={"origins": settings.cors_origins})

    logger.debug("Middleware configured")


__all__ = ["RequestIDMiddleware", "configure_middleware"]
