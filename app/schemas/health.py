"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    ok: bool = Field(default=True, description="Always true when the process answers")
    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    storage: Literal["available", "unavailable"] | None = Field(
        default=None,
        description="Whether the data file can be written",
    )
