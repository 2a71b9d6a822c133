"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["healthy"] = Field(default="healthy", description="Service status")
    timestamp: datetime = Field(description="Server time (UTC) when the check ran")
    uptime: float = Field(ge=0, description="Seconds since the application started")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
