"""Identity provider protocol.

Any class with these methods satisfies the protocol, so tests use a plain
test double (MockIdentityProvider) instead of a mocking library.

Implementations:
    - FirebaseIdentityProvider: Firebase Authentication via firebase-admin
    - MockIdentityProvider: deterministic token registry for tests
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from habit_service.core.schemas.auth import VerifiedToken


class InvalidTokenError(Exception):
    """The bearer token is malformed, expired, revoked or otherwise rejected."""


class AccountDeletionError(Exception):
    """The identity provider failed to delete an account."""


@runtime_checkable
class IdentityProvider(Protocol):
    """Verifies bearer tokens and manages the accounts behind them."""

    async def verify_token(self, token: str) -> VerifiedToken:
        """Verify a bearer token.

        Raises:
            InvalidTokenError: If the token is not accepted.
        """
        ...

    async def delete_account(self, uid: str) -> None:
        """Delete the account with subject id ``uid``.

        Raises:
            AccountDeletionError: If the provider rejects the deletion.
        """
        ...


__all__ = ["AccountDeletionError", "IdentityProvider", "InvalidTokenError"]
