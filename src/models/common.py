"""Common data models.

This module contains the base model and the operational response models.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(PydanticBaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        # Allow population by field name and alias
        populate_by_name=True,
        # Upstream payloads carry many fields we never read
        extra="ignore",
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")


class ErrorResponse(BaseModel):
    """Error body for unexpected failures."""

    detail: str = Field(..., description="Error detail message")
    type: str = Field(..., description="Error type")
    correlation_id: Optional[str] = Field(None, description="Request correlation ID")
