"""
Nice List Backend — Shared Schemas
====================================

What:  The camelCase base model, acknowledgement/id envelopes, and the error
       and health response formats used by every route.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# Range of a signed 64-bit INTEGER column. Ids outside it cannot exist in storage.
MIN_ROW_ID = -(2**63)
MAX_ROW_ID = 2**63 - 1


class CamelModel(BaseModel):
    """
    Base for every wire schema.

    Python code uses snake_case attributes (is_nice, checked_at); JSON uses
    camelCase keys (isNice, checkedAt). Both spellings are accepted on input,
    responses are always serialized with the camelCase alias.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


def require_text(value: str, field: str) -> str:
    """Strips surrounding whitespace and rejects empty strings."""
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field} must not be empty")
    return stripped


class IdResponse(BaseModel):
    """Returned by every create operation: the generated id of the new row."""
    id: int = Field(description="Identifier assigned by storage")


class OkResponse(BaseModel):
    """
    Acknowledgement for judge, delete and review.

    Sent whether or not the id matched a row; mutations do not check existence.
    """
    ok: bool = Field(default=True)


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "person with ID '7' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
