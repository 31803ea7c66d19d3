"""
Nice List Backend — Infraction Model
======================================

What:  ORM model for the `infractions` table: one naughty deed attributed to a person.
Who:   Written and read by InfractionRepository.

Rows are immutable once inserted. They disappear only when their person is
deleted (ON DELETE CASCADE on person_id).
"""

from datetime import datetime

from sqlalchemy import ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from nicelist.database import Base
from nicelist.models.types import UTCDateTime, utcnow

# 1 = minor, 5 = coal
MIN_SEVERITY = 1
MAX_SEVERITY = 5


class Infraction(Base):
    """A recorded naughty deed."""

    __tablename__ = "infractions"

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

    description: Mapped[str] = mapped_column(Text, nullable=False)

    severity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=MIN_SEVERITY,
        server_default=text(str(MIN_SEVERITY)),
    )

    occurred_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    # Per-person listing, newest first
    __table_args__ = (
        Index("idx_infractions_person_occurred", "person_id", "occurred_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Infraction(id={self.id}, person_id={self.person_id}, "
            f"severity={self.severity})>"
        )
