"""Test double for the identity provider.

MockIdentityProvider satisfies the IdentityProvider protocol with a token
registry, so tests need neither Firebase nor a mocking library.

Usage:
    provider = MockIdentityProvider()
    provider.register_token("alice-token", uid="alice", email="alice@example.com")
    provider.register_token("coach-token", uid="coach", claims={"role": "coach"})

    token = await provider.verify_token("alice-token")
    assert token.uid == "alice"

    app = create_app(store=InMemoryDocumentStore(), identity_provider=provider)
"""

from __future__ import annotations

from typing import Any

from habit_service.core.schemas.auth import VerifiedToken
from habit_service.infra.auth.protocols import AccountDeletionError, InvalidTokenError


class MockIdentityProvider:
    """In-memory token registry implementing IdentityProvider.

    Attributes:
        deleted_accounts: uids passed to delete_account, in call order.
        fail_deletions: When True, delete_account raises AccountDeletionError.
    """

    def __init__(self, *, fail_deletions: bool = False) -> None:
        self._tokens: dict[str, VerifiedToken] = {}
        self.deleted_accounts: list[str] = []
        self.fail_deletions = fail_deletions

    def register_token(
        self,
        token: str,
        *,
        uid: str,
        email: str | None = None,
        claims: dict[str, Any] | None = None,
    ) -> VerifiedToken:
        """Make ``token`` verify as the given account."""
        verified = VerifiedToken(
            uid=uid,
            email=email if email is not None else f"{uid}@example.com",
            claims={"uid": uid, **(claims or {})},
        )
        self._tokens[token] = verified
        return verified

    def revoke_token(self, token: str) -> None:
        self._tokens.pop(token, None)

    async def verify_token(self, token: str) -> VerifiedToken:
        try:
            return self._tokens[token]
        except KeyError as e:
            msg = "Unknown or revoked token"
            raise InvalidTokenError(msg) from e

    async def delete_account(self, uid: str) -> None:
        self.deleted_accounts.append(uid)
        if self.fail_deletions:
            msg = f"Account deletion failed for {uid}"
            raise AccountDeletionError(msg)


__all__ = ["MockIdentityProvider"]
