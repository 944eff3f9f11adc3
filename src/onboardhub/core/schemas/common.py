"""
Shared response schemas - the success/error envelope, health checks
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope every /api endpoint answers with."""

    success: bool = Field(default=True, description="Operation success status")
    data: Optional[T] = Field(default=None, description="Payload on success")
    message: Optional[str] = Field(default=None, description="Human-readable summary")
    error: Optional[str] = Field(default=None, description="Error message on failure")

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message)


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    success: bool = Field(default=False)
    error: str = Field(description="Human-readable error message")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"success": False, "error": "Invite link has expired"}
        }
    )


class ConfirmationRequiredResponse(BaseModel):
    """Clone deferred until the caller confirms merging into existing data."""

    success: bool = Field(default=False)
    requires_confirmation: bool = Field(default=True)
    message: str
    existing_data: dict[str, Any] = Field(default_factory=dict)


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=_utcnow)
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "healthy",
                "timestamp": "2025-09-13T10:30:00Z",
                "version": "1.0.0",
                "checks": {
                    "database": {"status": "healthy", "response_time_ms": 15},
                    "redis": {"status": "healthy", "response_time_ms": 5},
                },
            }
        }
    )
