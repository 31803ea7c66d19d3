"""
Nice List Backend — Infraction Schemas
========================================

Wire shapes for /api/people/{id}/infractions.

Severity is range-checked here, at the HTTP boundary. The storage layer
accepts any integer.
"""

from datetime import datetime

from pydantic import Field, field_validator

from nicelist.models.infraction import MAX_SEVERITY, MIN_SEVERITY
from nicelist.schemas.common import CamelModel, require_text


class InfractionResponse(CamelModel):
    """
    Example:
        {
            "id": 5,
            "personId": 17,
            "description": "Stole cookies from the cookie jar",
            "severity": 3,
            "occurredAt": "2024-11-30T15:30:00Z"
        }
    """
    id: int
    person_id: int
    description: str
    severity: int
    occurred_at: datetime


class InfractionCreate(CamelModel):
    """Body of POST /api/people/{id}/infractions."""
    description: str = Field(description="Description of the naughty deed")
    severity: int = Field(
        default=MIN_SEVERITY,
        ge=MIN_SEVERITY,
        le=MAX_SEVERITY,
        description="1 (minor) to 5 (very naughty)",
    )

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        return require_text(v, "description")
