"""API router for the users feature."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status

from habit_service.core.dependencies import IdentityDep, UserServiceDep
from habit_service.core.schemas.envelope import ApiResponse, ok
from habit_service.features.users.schemas import UserCreate, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Register the caller",
    description="Create the caller's user document. 409 if it already exists.",
)
async def create_user(payload: UserCreate, identity: IdentityDep, service: UserServiceDep) -> dict[str, Any]:
    user = await service.create_user(identity, payload)
    return ok(user.to_api(), "User created successfully")


@router.get(
    "/{user_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="Get a user",
)
async def get_user(user_id: str, identity: IdentityDep, service: UserServiceDep) -> dict[str, Any]:
    user = await service.get_user(identity, user_id)
    return ok(user.to_api())


@router.put(
    "/{user_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="Update a user",
    description="Only displayName and locale can be changed.",
)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    identity: IdentityDep,
    service: UserServiceDep,
) -> dict[str, Any]:
    user = await service.update_user(identity, user_id, payload)
    return ok(user.to_api(), "User updated successfully")


@router.delete(
    "/{user_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="Delete a user",
    description="Deletes the user, their completion log and their account.",
)
async def delete_user(user_id: str, identity: IdentityDep, service: UserServiceDep) -> dict[str, Any]:
    await service.delete_user(identity, user_id)
    return {"success": True, "message": "User account deleted successfully"}
