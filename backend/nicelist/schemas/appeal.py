"""
Nice List Backend — Appeal Schemas
====================================

Wire shapes for /api/appeals. Status is serialized as its integer value
(0 = pending, 1 = approved, 2 = denied).
"""

from datetime import datetime

from pydantic import Field, StrictBool, field_validator

from nicelist.models.appeal import AppealStatus
from nicelist.schemas.common import MAX_ROW_ID, MIN_ROW_ID, CamelModel, require_text


class AppealResponse(CamelModel):
    """
    Example:
        {
            "id": 15,
            "personId": 5,
            "infractionId": 28,
            "appealText": "I swear I was just borrowing the cookies!",
            "status": 0,
            "submittedAt": "2024-12-02T12:00:00Z"
        }
    """
    id: int
    person_id: int
    infraction_id: int
    appeal_text: str
    status: AppealStatus
    submitted_at: datetime


class AppealCreate(CamelModel):
    """Body of POST /api/appeals."""
    person_id: int = Field(
        ge=MIN_ROW_ID, le=MAX_ROW_ID, description="Person making the appeal"
    )
    infraction_id: int = Field(
        ge=MIN_ROW_ID, le=MAX_ROW_ID, description="Infraction being appealed"
    )
    appeal_text: str = Field(description="Why the infraction shouldn't count")

    @field_validator("appeal_text")
    @classmethod
    def validate_appeal_text(cls, v: str) -> str:
        return require_text(v, "appealText")


class AppealReview(CamelModel):
    """Body of PATCH /api/appeals/{id}/review."""
    approved: StrictBool = Field(description="Whether the appeal is accepted")
