"""
Noteful Backend — Shared Response Schemas
==========================================

What:  Error envelope and health check models used by every router.
Why:   Clients parse one error shape for every failure, whatever the cause:

           {"error": {"message": "Note doesn't exist"}}
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    Standardized error response for all API errors (400, 404, 500).

    No codes or request internals are included; the correlation ID is
    returned in the X-Request-ID header instead.
    """
    error: ErrorDetail


def error_body(message: str) -> dict:
    """Builds the JSON body of an ErrorResponse."""
    return ErrorResponse(error=ErrorDetail(message=message)).model_dump()


class HealthResponse(BaseModel):
    """Returned by GET /health for container and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
