"""
Nice List Backend — Person Schemas
====================================

Wire shapes for /api/people.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, StrictBool, field_validator

from nicelist.schemas.common import CamelModel, require_text


class PersonResponse(CamelModel):
    """
    A person and their current verdict.

    Example:
        {
            "id": 1,
            "name": "Candy Cane",
            "isNice": true,
            "reason": "Helped an old lady cross the street",
            "checkedAt": "2024-12-01T10:00:00Z"
        }
    """
    id: int
    name: str
    is_nice: bool
    reason: str
    checked_at: datetime


class PersonCreate(CamelModel):
    """Body of POST /api/people."""
    name: str = Field(description="Name of the new person (required, non-empty)")
    is_nice: bool = Field(default=True, description="Initial verdict")
    reason: Optional[str] = Field(default=None, description="Reason for the initial verdict")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_text(v, "name")


class PersonJudgement(CamelModel):
    """
    Body of PATCH /api/people/{id}.

    isNice must be a real JSON boolean; "true" or 1 are rejected.
    """
    is_nice: StrictBool = Field(description="Official verdict")
    reason: Optional[str] = Field(default=None, description="Reason for the judgement")
