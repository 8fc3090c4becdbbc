"""
Output DTOs for the auth and health endpoints.
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any

from src.core.service.auth.models.user import PublicUser


class AuthResponseDto(BaseModel):
    """DTO for auth endpoint responses."""

    success: bool = Field(True, description="Whether the action succeeded")
    message: str = Field(..., description="Human-readable result")
    user: Optional[PublicUser] = Field(None, description="Public user data, never the credential")


class HealthCheckResponseDto(BaseModel):
    """DTO for health check response."""

    status: str = Field(..., description="Overall service status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    timestamp: str = Field(..., description="Check timestamp")
    checks: Dict[str, Any] = Field(default_factory=dict, description="Dependency checks")
