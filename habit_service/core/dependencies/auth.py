"""Authentication dependencies.

Resolves ``Authorization: Bearer <token>`` into the request Identity.

Usage:
    from habit_service.core.dependencies.auth import IdentityDep

    @router.get("/habits")
    async def list_habits(identity: IdentityDep, service: HabitServiceDep):
        return await service.list_habits(identity)

A missing or non-Bearer header yields ``None``; the service access check
then answers 401. A token the provider rejects fails immediately with 401.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from habit_service.core.dependencies.services import get_services
from habit_service.core.exceptions import UnauthorizedException
from habit_service.core.schemas.auth import Identity
from habit_service.infra.auth import InvalidTokenError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Identity provider ID token")


async def get_current_identity(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Identity | None:
    """Identity of the caller, or None when no bearer token was sent.

    Raises:
        UnauthorizedException: The token was rejected.
    """
    if credentials is None or not credentials.credentials:
        return None

    try:
        identity = await get_services(request).identities.resolve(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning("Bearer token rejected", extra={"error": str(e)})
        raise UnauthorizedException("Invalid or expired token", extra={"auth_method": "bearer"}) from e

    request.state.identity = identity
    return identity


IdentityDep = Annotated[Identity | None, Depends(get_current_identity)]
