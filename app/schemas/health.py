"""Pydantic schemas for readiness and liveness responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /api/v1/health/."""

    status: Literal["ok", "degraded"]
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"]
    missing_tables: list[str] = Field(
        default_factory=list,
        description="Tables the service needs that are not migrated yet",
    )


class LivenessResponse(BaseModel):
    """Response body for GET /."""

    message: str
    timestamp: datetime
