"""Firebase Authentication identity provider.

The firebase-admin SDK is synchronous (token verification may fetch signing
certificates over HTTP), so every call runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin import exceptions as firebase_exceptions

from habit_service.core.schemas.auth import VerifiedToken
from habit_service.infra.auth.protocols import AccountDeletionError, InvalidTokenError

if TYPE_CHECKING:
    from habit_service.core.settings.auth import AuthSettings

logger = logging.getLogger(__name__)

APP_NAME = "habit-service"


def _get_or_init_app(settings: AuthSettings) -> firebase_admin.App:
    try:
        return firebase_admin.get_app(APP_NAME)
    except ValueError:
        pass

    credential: Any = None
    if settings.credentials_file is not None:
        credential = credentials.Certificate(str(settings.credentials_file))
    options = {"projectId": settings.project_id} if settings.project_id else None
    logger.info(
        "Initializing Firebase app",
        extra={"project_id": settings.project_id, "explicit_credentials": credential is not None},
    )
    return firebase_admin.initialize_app(credential, options, name=APP_NAME)


class FirebaseIdentityProvider:
    """IdentityProvider backed by ``firebase_admin.auth``."""

    def __init__(
        self,
        app: firebase_admin.App,
        *,
        check_revoked: bool = False,
        clock_skew_seconds: int = 10,
    ) -> None:
        self._app = app
        self._check_revoked = check_revoked
        self._clock_skew_seconds = clock_skew_seconds

    @classmethod
    def from_settings(cls, settings: AuthSettings) -> FirebaseIdentityProvider:
        return cls(
            _get_or_init_app(settings),
            check_revoked=settings.check_revoked,
            clock_skew_seconds=settings.clock_skew_seconds,
        )

    def _verify(self, token: str) -> dict[str, Any]:
        return auth.verify_id_token(
            token,
            app=self._app,
            check_revoked=self._check_revoked,
            clock_skew_seconds=self._clock_skew_seconds,
        )

    async def verify_token(self, token: str) -> VerifiedToken:
        try:
            claims = await asyncio.to_thread(self._verify, token)
        except (
            ValueError,
            auth.InvalidIdTokenError,
            auth.CertificateFetchError,
            auth.UserDisabledError,
        ) as e:
            raise InvalidTokenError(str(e)) from e
        return VerifiedToken(uid=claims["uid"], email=claims.get("email"), claims=claims)

    async def delete_account(self, uid: str) -> None:
        try:
            await asyncio.to_thread(auth.delete_user, uid, app=self._app)
        except (ValueError, firebase_exceptions.FirebaseError) as e:
            raise AccountDeletionError(str(e)) from e


__all__ = ["FirebaseIdentityProvider"]
