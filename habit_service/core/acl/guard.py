"""Ownership-or-elevated-role access decisions.

The guard is a pure decision function over the typed request identity.
Route handlers and resolvers do not call it directly; services enforce it at
their boundary so REST and GraphQL apply the same policy.

Rules, evaluated in order:
    0. PUBLIC requirement            -> allow
    1. no identity                   -> deny (unauthenticated)
    2. AUTHENTICATED requirement     -> allow
    3. OWNER_OR_ELEVATED requirement -> allow when the caller owns the target
       or holds an elevated role, otherwise deny (forbidden)

Example:
    >>> guard = AccessGuard(elevated_roles={"coach"})
    >>> guard.authorize(Identity(id="u1", role="user"), "u2", Requirement.OWNER_OR_ELEVATED)
    Decision(allowed=False, reason=<DenyReason.FORBIDDEN: 'forbidden'>)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from habit_service.core.exceptions import ForbiddenException, UnauthorizedException

if TYPE_CHECKING:
    from habit_service.core.schemas.auth import Identity

__all__ = ["AccessGuard", "Decision", "DenyReason", "Requirement"]


class Requirement(StrEnum):
    """Condition a caller must meet for an operation."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    OWNER_OR_ELEVATED = "owner_or_elevated"


class DenyReason(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of an access check. ``reason`` is set only on denial."""

    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> Decision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> Decision:
        return cls(allowed=False, reason=reason)


class AccessGuard:
    """Decides whether an identity may act on a target owner's resources.

    Args:
        elevated_roles: Roles allowed to act on any user's resources.
    """

    def __init__(self, elevated_roles: Iterable[str] = ("coach",)) -> None:
        self.elevated_roles = frozenset(elevated_roles)

    def is_elevated(self, identity: Identity | None) -> bool:
        return identity is not None and identity.role in self.elevated_roles

    def authorize(
        self,
        identity: Identity | None,
        target_owner_id: str | None,
        requirement: Requirement,
    ) -> Decision:
        """Return the access decision without side effects."""
        if requirement is Requirement.PUBLIC:
            return Decision.allow()
        if identity is None:
            return Decision.deny(DenyReason.UNAUTHENTICATED)
        if requirement is Requirement.AUTHENTICATED:
            return Decision.allow()
        if identity.id == target_owner_id or self.is_elevated(identity):
            return Decision.allow()
        return Decision.deny(DenyReason.FORBIDDEN)

    def enforce(
        self,
        identity: Identity | None,
        target_owner_id: str | None,
        requirement: Requirement,
    ) -> Identity | None:
        """Authorize and raise on denial.

        Returns:
            The identity, so callers can narrow it after the check.

        Raises:
            UnauthorizedException: No identity was supplied.
            ForbiddenException: The identity may not act on the target.
        """
        decision = self.authorize(identity, target_owner_id, requirement)
        if decision.allowed:
            return identity
        if decision.reason is DenyReason.UNAUTHENTICATED:
            raise UnauthorizedException("Authentication required")
        raise ForbiddenException(
            "Access denied",
            extra={"target_owner_id": target_owner_id},
        )
