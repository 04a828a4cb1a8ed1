"""
Shared response schemas - messages, errors, health
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(description="Human-readable result")
    warning: Optional[str] = Field(default=None, description="Set when the change was not saved to disk")


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str = Field(description="Failure kind")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(default_factory=_now, description="Error timestamp")

    class Config:
        json_schema_extra = {
            "example": {
                "error": "NotFound",
                "message": "Note not found",
                "details": None,
                "timestamp": "2025-09-13T17:23:45Z",
            }
        }


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=_now)
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")
