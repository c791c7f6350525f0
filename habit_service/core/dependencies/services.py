"""Service wiring.

The service graph is built once at startup from the long-lived store and
identity provider clients and kept on ``app.state.services``. Route handlers
pull individual services through the ``get_*_service`` dependencies;
GraphQL resolvers read the same container from their context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

from fastapi import Depends, Request

from habit_service.core.acl import AccessGuard
from habit_service.core.database import FanoutResolver
from habit_service.features.bundles.service import BundleService
from habit_service.features.completions.service import CompletionService
from habit_service.features.habits.service import HabitService
from habit_service.features.users.identity import IdentityResolver
from habit_service.features.users.service import UserService

if TYPE_CHECKING:
    from habit_service.core.settings.auth import AuthSettings
    from habit_service.core.settings.pagination import PaginationSettings
    from habit_service.infra.auth import IdentityProvider
    from habit_service.infra.firestore import DocumentStore


@dataclass(frozen=True, slots=True)
class ServiceContainer:
    """Every service plus the shared collaborators they were built from."""

    store: DocumentStore
    identity_provider: IdentityProvider
    guard: AccessGuard
    identities: IdentityResolver
    habits: HabitService
    bundles: BundleService
    users: UserService
    completions: CompletionService


def build_services(
    store: DocumentStore,
    identity_provider: IdentityProvider,
    *,
    auth: AuthSettings,
    pagination: PaginationSettings,
) -> ServiceContainer:
    """Assemble the service graph around one store and identity provider."""
    guard = AccessGuard(auth.elevated_roles)
    habits = HabitService(store, guard, pagination, FanoutResolver(store))
    return ServiceContainer(
        store=store,
        identity_provider=identity_provider,
        guard=guard,
        identities=IdentityResolver(identity_provider, store, auth),
        habits=habits,
        bundles=BundleService(store, guard, pagination, habits),
        users=UserService(store, guard, auth, identity_provider),
        completions=CompletionService(store, guard, pagination, habits),
    )


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_habit_service(request: Request) -> HabitService:
    return get_services(request).habits


def get_bundle_service(request: Request) -> BundleService:
    return get_services(request).bundles


def get_user_service(request: Request) -> UserService:
    return get_services(request).users


def get_completion_service(request: Request) -> CompletionService:
    return get_services(request).completions


ServicesDep = Annotated[ServiceContainer, Depends(get_services)]
HabitServiceDep = Annotated[HabitService, Depends(get_habit_service)]
BundleServiceDep = Annotated[BundleService, Depends(get_bundle_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CompletionServiceDep = Annotated[CompletionService, Depends(get_completion_service)]
