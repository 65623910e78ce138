"""
Storefront Backend — Shared Response Schemas
==============================================

What:  Error and health payloads used by every route.
How:   Referenced from route `responses=` declarations so the OpenAPI docs
       describe the error envelope, and returned by the health route.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ResourceModel(BaseModel):
    """
    Base for resource response models.

    Reads ORM rows directly (from_attributes) and serializes attribute
    names in camelCase, which is what clients send and receive.
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FieldErrorDetail(BaseModel):
    """One failing field in a 400 response."""
    field: str = Field(description="Request field name, e.g. categoryName")
    message: str = Field(description="Problem with the field, e.g. invalid categoryName")


class ErrorResponse(BaseModel):
    """
    What:  Error envelope for all API errors.

    Example:
        {
            "error": "invalid categoryName; ",
            "details": [{"field": "categoryName", "message": "invalid categoryName"}],
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Rendered error text")
    details: Optional[List[FieldErrorDetail]] = Field(default=None, description="Field errors")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
