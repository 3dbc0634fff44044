"""
GeoJournal Backend — Shared Response Schemas
=============================================

What:  Response models shared by every router: error body, plain
       confirmation message, health report.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Body of every error response, whatever the failure kind.

    Example:
        {
            "error": "not_found",
            "message": "Could not find an entry for the provided id.",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    """Confirmation body for operations that return no record."""
    message: str = Field(description="Human-readable confirmation")


class HealthResponse(BaseModel):
    """Body of GET /health, read by monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    geocoder: str = Field(description="Geocoding client: configured, not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
