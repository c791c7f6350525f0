"""Service layer for the users feature.

Covers self-registration, profile reads and edits, and account removal. The
two lifecycle hooks at the bottom run on behalf of the identity provider
(an account was created or deleted upstream) and skip access checks.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from habit_service.core.acl import Requirement
from habit_service.core.database import QueryBuilder
from habit_service.core.database.documents import USERS, completion_log_path
from habit_service.core.exceptions import (
    ConflictException,
    ForbiddenException,
    InternalServerException,
    InvalidInputException,
    NotFoundException,
)
from habit_service.core.services.base import BaseService
from habit_service.features.users.models import User
from habit_service.infra.auth import AccountDeletionError
from habit_service.infra.firestore import BatchTooLarge, DocumentAlreadyExists, DocumentRef

if TYPE_CHECKING:
    from habit_service.core.acl import AccessGuard
    from habit_service.core.schemas.auth import Identity
    from habit_service.core.settings.auth import AuthSettings
    from habit_service.features.users.schemas import UserCreate, UserUpdate
    from habit_service.infra.auth import IdentityProvider
    from habit_service.infra.firestore import DocumentStore


class UserService(BaseService):
    """User profile management with cascading deletion."""

    def __init__(
        self,
        store: DocumentStore,
        guard: AccessGuard,
        auth: AuthSettings,
        identity_provider: IdentityProvider,
    ) -> None:
        super().__init__()
        self.store = store
        self.guard = guard
        self.auth = auth
        self.identity_provider = identity_provider

    async def create_user(self, identity: Identity | None, payload: UserCreate) -> User:
        """Create the caller's own user document.

        Raises:
            UnauthorizedException: No caller.
            InvalidInputException: Unknown role requested.
            ForbiddenException: A non-default role requested by a caller
                without an elevated role.
            ConflictException: The caller already has a user document.
        """
        caller = self.guard.enforce(identity, None, Requirement.AUTHENTICATED)
        role = payload.role or self.auth.default_role
        if role not in self.auth.known_roles:
            raise InvalidInputException(
                f"role must be one of {sorted(self.auth.known_roles)}",
                extra={"role": role},
            )
        if role != self.auth.default_role and not self.guard.is_elevated(caller):
            raise ForbiddenException(
                "Only elevated users may assign roles",
                extra={"role": role},
            )

        user = User(
            id=caller.id,
            display_name=payload.display_name,
            email=str(payload.email),
            role=role,
            locale=payload.locale,
            created_at=datetime.now(UTC),
        )
        try:
            await self.store.create(USERS, user.id, user.to_document())
        except DocumentAlreadyExists as e:
            raise ConflictException(
                "User document already exists",
                type="user-exists",
                extra={"user_id": user.id},
            ) from e

        self.logger.info(
            "User created",
            extra={"user_id": user.id, "role": role, "operation": "service.create_user"},
        )
        return user

    async def get_user(self, identity: Identity | None, user_id: str) -> User:
        """Fetch a user document.

        Raises:
            UnauthorizedException: No caller.
            ForbiddenException: Caller is neither the user nor elevated.
            NotFoundException: No such user document.
        """
        self.guard.enforce(identity, user_id, Requirement.OWNER_OR_ELEVATED)
        return await self._require_user(user_id)

    async def get_me(self, identity: Identity | None) -> User | None:
        """The caller's own user document, None if not registered yet."""
        caller = self.guard.enforce(identity, None, Requirement.AUTHENTICATED)
        return await self.find_user(caller.id)

    async def find_user(self, user_id: str) -> User | None:
        document = await self.store.get(USERS, user_id)
        if document is None:
            return None
        return User.from_document(document)

    async def update_user(self, identity: Identity | None, user_id: str, payload: UserUpdate) -> User:
        """Apply display name and locale changes.

        Raises:
            InvalidInputException: Nothing to update.
            NotFoundException: No such user document.
        """
        self.guard.enforce(identity, user_id, Requirement.OWNER_OR_ELEVATED)
        changes = payload.changes()
        if not changes:
            raise InvalidInputException("No valid fields to update")

        await self._require_user(user_id)
        await self.store.update(USERS, user_id, changes)

        self.logger.info(
            "User updated",
            extra={"user_id": user_id, "fields": sorted(changes), "operation": "service.update_user"},
        )
        return await self._require_user(user_id)

    async def delete_user(self, identity: Identity | None, user_id: str) -> None:
        """Delete a user, their completion log and their account.

        The user document and every completion log entry go in one atomic
        batch. Deleting the identity provider account afterwards is best
        effort: a failure is logged and the call still succeeds.

        Raises:
            NotFoundException: No such user document.
            InternalServerException: Too many log entries for one batch.
        """
        self.guard.enforce(identity, user_id, Requirement.OWNER_OR_ELEVATED)
        await self._require_user(user_id)
        removed = await self._delete_user_data(user_id)

        try:
            await self.identity_provider.delete_account(user_id)
        except AccountDeletionError:
            self.logger.exception(
                "Identity provider account deletion failed",
                extra={"user_id": user_id, "operation": "service.delete_user"},
            )

        self.logger.info(
            "User deleted",
            extra={"user_id": user_id, "completions_removed": removed, "operation": "service.delete_user"},
        )

    # Lifecycle hooks (identity provider events)

    async def provision_account(
        self,
        uid: str,
        email: str | None = None,
        display_name: str | None = None,
    ) -> User:
        """Create the user document for a newly created account.

        Idempotent: an existing document is returned unchanged.
        """
        existing = await self.find_user(uid)
        if existing is not None:
            self._lazy.debug(lambda: f"provision_account({uid}) -> already provisioned")
            return existing

        name = display_name or (email.split("@", 1)[0] if email else "") or "User"
        user = User(
            id=uid,
            display_name=name,
            email=email or "",
            role=self.auth.default_role,
            locale="en",
            created_at=datetime.now(UTC),
        )
        try:
            await self.store.create(USERS, uid, user.to_document())
        except DocumentAlreadyExists:
            # Created concurrently between the read and the write
            created = await self.find_user(uid)
            if created is None:
                raise
            return created

        self.logger.info("Account provisioned", extra={"user_id": uid, "operation": "service.provision_account"})
        return user

    async def purge_account(self, uid: str) -> int:
        """Remove all data of an account deleted upstream.

        Does not call the identity provider. A missing user document is not
        an error. Returns the number of completion log entries removed.
        """
        removed = await self._delete_user_data(uid)
        self.logger.info(
            "Account purged",
            extra={"user_id": uid, "completions_removed": removed, "operation": "service.purge_account"},
        )
        return removed

    async def _require_user(self, user_id: str) -> User:
        user = await self.find_user(user_id)
        if user is None:
            raise NotFoundException("User not found", type="user-not-found", extra={"user_id": user_id})
        return user

    async def _delete_user_data(self, user_id: str) -> int:
        log_path = completion_log_path(user_id)
        logs = await self.store.query(QueryBuilder(log_path).build())
        refs = [DocumentRef(log_path, doc.id) for doc in logs]
        refs.append(DocumentRef(USERS, user_id))
        try:
            await self.store.delete_all(refs)
        except BatchTooLarge as e:
            raise InternalServerException(
                "Too many records to delete atomically",
                extra={"user_id": user_id, "writes": e.size},
            ) from e
        return len(logs)
