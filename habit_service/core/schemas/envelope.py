"""Flat REST response envelope: ``{success, data, error?, message?}``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    """Envelope returned by every REST endpoint."""

    success: bool = Field(description="Whether the request succeeded")
    data: Any | None = Field(default=None, description="Payload on success")
    error: str | None = Field(default=None, description="Error summary on failure")
    message: str | None = Field(default=None, description="Human-readable detail")


def ok(data: Any = None, message: str | None = None) -> dict[str, Any]:
    """Build a success envelope, omitting unset optional keys."""
    body: dict[str, Any] = {"success": True, "data": data}
    if message is not None:
        body["message"] = message
    return body


def fail(error: str, message: str | None = None) -> dict[str, Any]:
    """Build a failure envelope, omitting unset optional keys."""
    body: dict[str, Any] = {"success": False, "error": error}
    if message is not None:
        body["message"] = message
    return body
