"""Resolve bearer tokens into request identities."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from habit_service.core.database.documents import USERS
from habit_service.core.schemas.auth import Identity
from habit_service.infra.logging import set_log_context

if TYPE_CHECKING:
    from habit_service.core.schemas.auth import VerifiedToken
    from habit_service.core.settings.auth import AuthSettings
    from habit_service.infra.auth import IdentityProvider
    from habit_service.infra.firestore import DocumentStore

logger = logging.getLogger(__name__)


class IdentityResolver:
    """Turns a bearer token into an Identity.

    Role resolution order: the token's role claim when it names a known
    role, then the role on the stored user document, then the default role.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        store: DocumentStore,
        settings: AuthSettings,
    ) -> None:
        self.provider = provider
        self.store = store
        self.settings = settings

    async def resolve(self, token: str) -> Identity:
        """Verify ``token`` and build the caller's identity.

        Raises:
            InvalidTokenError: The provider rejected the token.
        """
        verified = await self.provider.verify_token(token)
        identity = Identity(
            id=verified.uid,
            email=verified.email,
            role=await self.resolve_role(verified),
        )
        set_log_context(user_id=identity.id)
        return identity

    async def resolve_role(self, verified: VerifiedToken) -> str:
        claimed = verified.claims.get(self.settings.role_claim)
        if isinstance(claimed, str) and claimed in self.settings.known_roles:
            return claimed

        document = await self.store.get(USERS, verified.uid)
        if document is not None:
            stored = document.data.get("role")
            if isinstance(stored, str) and stored in self.settings.known_roles:
                return stored
            if stored is not None:
                logger.warning(
                    "Ignoring unknown role on user document",
                    extra={"user_id": verified.uid, "role": stored},
                )
        return self.settings.default_role
