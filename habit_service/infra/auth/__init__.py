"""Identity provider integrations.

``create_identity_provider`` builds the Firebase provider; the firebase-admin
SDK is imported only at that point.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from habit_service.infra.auth.protocols import (
    AccountDeletionError,
    IdentityProvider,
    InvalidTokenError,
)

if TYPE_CHECKING:
    from habit_service.core.settings.auth import AuthSettings


def create_identity_provider(settings: AuthSettings) -> IdentityProvider:
    from habit_service.infra.auth.firebase import FirebaseIdentityProvider

    return FirebaseIdentityProvider.from_settings(settings)


__all__ = [
    "AccountDeletionError",
    "IdentityProvider",
    "InvalidTokenError",
    "create_identity_provider",
]
