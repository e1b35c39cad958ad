"""
Storefront Backend — Shared Schemas
=====================================

What:  Response shapes reused by every resource: ORM base model, delete
       confirmation, pagination envelope fields, errors and health.
"""

from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Base Models
# ══════════════════════════════════════════════════════════════════════════


class ORMModel(BaseModel):
    """Response model populated from SQLAlchemy instances."""

    model_config = ConfigDict(from_attributes=True)


class RequestModel(BaseModel):
    """
    Request body model.

    Unknown properties are rejected (→ 400 invalid_data) so typos in field
    names never silently drop data.
    """

    model_config = ConfigDict(extra="forbid")


def metadata_field() -> Any:
    """
    `metadata` column is mapped as `metadata_` on the ORM side
    (`metadata` is reserved by SQLAlchemy's declarative base).
    """
    return Field(
        default=None,
        validation_alias=AliasChoices("metadata_", "metadata"),
        description="Free-form key/value data attached to the resource",
    )


# ══════════════════════════════════════════════════════════════════════════
# Envelope Models
# ══════════════════════════════════════════════════════════════════════════


class ListEnvelope(BaseModel):
    """Fields shared by every paginated list response."""

    count: int = Field(description="Total number of records matching the filters")
    offset: int = Field(description="Number of records skipped")
    limit: int = Field(description="Maximum number of records returned")


class DeleteResponse(BaseModel):
    """
    Confirmation returned by DELETE endpoints.

    Example:
        {"id": "reg_01H…", "object": "region", "deleted": true}
    """

    id: str = Field(description="Id of the deleted resource")
    object: str = Field(description="Type of the deleted resource")
    deleted: bool = Field(default=True, description="Whether the resource was deleted")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "invalid_data", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "invalid_request_error",
            "message": "Denmark already exists in region reg_01H…",
            "details": {"country_code": "dk"},
            "request_id": "4f1c2a9b"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"description": "Invalid request data", "model": ErrorResponse},
    401: {"description": "Authentication required", "model": ErrorResponse},
    404: {"description": "Resource not found", "model": ErrorResponse},
    409: {"description": "Resource in an invalid state", "model": ErrorResponse},
    422: {"description": "Request conflicts with existing data", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer health checks.
    """

    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    storage: str = Field(description="File storage: writable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
