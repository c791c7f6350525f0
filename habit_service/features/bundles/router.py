"""API router for the bundles feature."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Query

from habit_service.core.dependencies import BundleServiceDep, IdentityDep
from habit_service.core.schemas.envelope import ApiResponse, ok
from habit_service.features.bundles.models import Bundle

router = APIRouter(prefix="/bundles", tags=["bundles"])


@router.get(
    "",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="List bundles",
    description="Bundles ordered by display order.",
)
async def list_bundles(
    identity: IdentityDep,
    service: BundleServiceDep,
    limit: Annotated[int | None, Query(description="Page size, capped at 50")] = None,
    offset: int = 0,
) -> dict[str, Any]:
    connection = await service.list_bundles(identity, limit=limit, offset=offset)
    return ok(connection.to_offset_page(offset).dump(Bundle.to_api))


@router.get(
    "/{bundle_id}",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="Get a bundle",
)
async def get_bundle(bundle_id: str, identity: IdentityDep, service: BundleServiceDep) -> dict[str, Any]:
    bundle = await service.get_bundle(identity, bundle_id)
    return ok(bundle.to_api())


@router.get(
    "/{bundle_id}/habits",
    response_model=ApiResponse,
    response_model_exclude_unset=True,
    summary="List a bundle's habits",
    description="Habits in bundle order. Ids that no longer resolve are left out.",
)
async def list_bundle_habits(
    bundle_id: str,
    identity: IdentityDep,
    service: BundleServiceDep,
) -> dict[str, Any]:
    habits = await service.list_bundle_habits(identity, bundle_id)
    return ok([habit.to_api() for habit in habits])
