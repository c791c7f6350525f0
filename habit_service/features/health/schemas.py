"""Health check schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness answer of the service.

    Example:
        ```json
        {"status": "healthy", "timestamp": "2025-01-01T00:00:00Z", "version": "1.0.0"}
        ```
    """

    status: Literal["healthy"] = Field(default="healthy", description="Health status")
    timestamp: datetime = Field(description="Check timestamp")
    version: str = Field(min_length=1, max_length=50, description="Service version")
