"""
Nice List Backend — Person Model
==================================

What:  ORM model for the `people` table.
Who:   Written and read by PersonRepository; referenced by infractions and appeals.

Judgement model:
    Every person carries one current verdict (is_nice + reason) and the time it
    was last set (checked_at). A judgement overwrites all three fields; there is
    no verdict history. The name never changes after creation.

Index on checked_at:
    Serves the people listing, which always returns the most recently judged
    person first.
"""

from datetime import datetime

from sqlalchemy import Boolean, Index, Integer, Text, text, true
from sqlalchemy.orm import Mapped, mapped_column

from nicelist.database import Base
from nicelist.models.types import UTCDateTime, utcnow


class Person(Base):
    """
    Someone on the list, judged naughty or nice.

    Lifecycle:
        1. Created with is_nice=True, reason='' unless told otherwise
        2. Judged any number of times (is_nice / reason / checked_at mutate)
        3. Deleted, cascading to their infractions and appeals
    """

    __tablename__ = "people"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    is_nice: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    reason: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    # Set on creation and on every judgement; never moves backwards
    checked_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
    )

    __table_args__ = (
        Index("idx_people_checked_at", "checked_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Person(id={self.id}, name='{self.name}', "
            f"is_nice={self.is_nice}, checked_at='{self.checked_at}')>"
        )
