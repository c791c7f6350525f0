"""Shared schemas used across features."""

from habit_service.core.schemas.auth import Identity, VerifiedToken
from habit_service.core.schemas.envelope import ApiResponse, fail, ok

__all__ = ["ApiResponse", "Identity", "VerifiedToken", "fail", "ok"]
