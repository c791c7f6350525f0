"""FastAPI dependencies for route handlers.

Usage:
    from habit_service.core.dependencies import HabitServiceDep, IdentityDep
"""

from habit_service.core.dependencies.auth import IdentityDep, get_current_identity
from habit_service.core.dependencies.services import (
    BundleServiceDep,
    CompletionServiceDep,
    HabitServiceDep,
    ServiceContainer,
    ServicesDep,
    UserServiceDep,
    build_services,
    get_services,
)

__all__ = [
    "BundleServiceDep",
    "CompletionServiceDep",
    "HabitServiceDep",
    "IdentityDep",
    "ServiceContainer",
    "ServicesDep",
    "UserServiceDep",
    "build_services",
    "get_current_identity",
    "get_services",
]
