"""GraphQL types for users."""

from __future__ import annotations

from datetime import datetime

import strawberry

from habit_service.features.users.models import User
from habit_service.features.users.schemas import UserCreate, UserUpdate


@strawberry.type(name="User", description="A user profile")
class UserType:
    uid: str
    display_name: str
    email: str
    role: str
    locale: str
    created_at: datetime

    @classmethod
    def from_model(cls, user: User) -> UserType:
        return cls(
            uid=user.id,
            display_name=user.display_name,
            email=user.email,
            role=user.role,
            locale=user.locale,
            created_at=user.created_at,
        )


@strawberry.input(name="CreateUserInput", description="Self-registration payload")
class CreateUserInput:
    display_name: str
    email: str
    role: str | None = strawberry.field(default=None, description="Non-default roles need an elevated caller")
    locale: str = "en"

    def to_pydantic(self) -> UserCreate:
        return UserCreate(display_name=self.display_name, email=self.email, role=self.role, locale=self.locale)


@strawberry.input(name="UpdateUserInput", description="Editable profile fields")
class UpdateUserInput:
    display_name: str | None = None
    locale: str | None = None

    def to_pydantic(self) -> UserUpdate:
        return UserUpdate(display_name=self.display_name, locale=self.locale)


__all__ = ["CreateUserInput", "UpdateUserInput", "UserType"]
