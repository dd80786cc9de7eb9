"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Database connectivity status",
    )
    last_error: str | None = Field(
        default=None,
        alias="lastError",
        description="Error class of the failed connectivity probe, if any",
    )
