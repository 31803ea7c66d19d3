"""
Nice List Backend — Appeal Model
==================================

What:  ORM model for the `appeals` table, plus the AppealStatus state enum.
Who:   Written and read by AppealRepository.

State machine:
    ┌─────────┐  review(approved=True)   ┌──────────┐
    │ PENDING │ ───────────────────────▶ │ APPROVED │
    │   (0)   │                          │   (1)    │
    └─────────┘  review(approved=False)  └──────────┘
         │                               ┌──────────┐
         └─────────────────────────────▶ │  DENIED  │
                                         │   (2)    │
                                         └──────────┘
    APPROVED and DENIED are terminal. Status is stored as its integer value.

Both foreign keys cascade: an appeal disappears with its person or its infraction.
"""

import enum
from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from nicelist.database import Base
from nicelist.models.types import UTCDateTime, utcnow


class AppealStatus(enum.IntEnum):
    """Review state of an appeal."""

    PENDING = 0
    APPROVED = 1
    DENIED = 2

    @classmethod
    def from_decision(cls, approved: bool) -> "AppealStatus":
        """Terminal state reached by a review decision."""
        return cls.APPROVED if approved else cls.DENIED


class Appeal(Base):
    """A request to overturn an infraction."""

    __tablename__ = "appeals"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    person_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("people.id", ondelete="CASCADE"),
        nullable=False,
    )

    infraction_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("infractions.id", ondelete="CASCADE"),
        nullable=False,
    )

    appeal_text: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=AppealStatus.PENDING.value,
        server_default=text(str(AppealStatus.PENDING.value)),
    )

    submitted_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    # Pending queue, newest first
    __table_args__ = (
        Index("idx_appeals_status_submitted", "status", "submitted_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Appeal(id={self.id}, infraction_id={self.infraction_id}, "
            f"status={AppealStatus(self.status).name})>"
        )
