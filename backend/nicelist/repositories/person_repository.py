"""
Nice List Backend — Person Repository
=======================================

What:  Queries and judgements over the `people` table.
Who:   Called by the /api/people route handlers.

Operations:
    list_people()                       → people, most recently judged first
    get_person(id)                      → one person or NotFoundError
    add_person(name, is_nice, reason)   → generated id
    judge_person(id, is_nice, reason)   → overwrite verdict, stamp checked_at
    delete_person(id)                   → delete, cascading to infractions/appeals

judge_person and delete_person do not check that the id exists. An unknown id
updates or deletes zero rows and the call still succeeds.
"""

import logging
from typing import List, Optional

from sqlalchemy import case, delete, desc, insert, literal, select, update

from nicelist.exceptions import NotFoundError
from nicelist.models.person import Person
from nicelist.models.types import UTCDateTime, utcnow
from nicelist.repositories.base import STORAGE_ERRORS, Repository

logger = logging.getLogger(__name__)


class PersonRepository(Repository):
    """Data access for people and their naughty/nice verdicts."""

    async def list_people(self) -> List[Person]:
        """
        All people ordered by checked_at descending.

        Query plan:
            SELECT * FROM people ORDER BY checked_at DESC, id DESC
            → idx_people_checked_at, scanned backwards
        Ties on checked_at fall back to the newer id first.
        """
        try:
            result = await self.session.execute(
                select(Person)
                .order_by(desc(Person.checked_at), desc(Person.id))
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())
        except STORAGE_ERRORS as e:
            await self._fail(e, "Could not retrieve people. Please try again.")

    async def get_person(self, person_id: int) -> Person:
        """
        Fetch one person by id.

        Raises:
            NotFoundError: No person has this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            result = await self.session.execute(
                select(Person)
                .where(Person.id == person_id)
                .limit(1)
                .execution_options(populate_existing=True)
            )
            person = result.scalar_one_or_none()
        except STORAGE_ERRORS as e:
            await self._fail(
                e,
                "Could not retrieve the person. Please try again.",
                context={"person_id": person_id},
            )

        if person is None:
            raise NotFoundError(resource="person", resource_id=person_id)
        return person

    async def add_person(
        self,
        name: str,
        is_nice: bool = True,
        reason: Optional[str] = None,
    ) -> int:
        """
        Put a new person on the list.

        The caller is responsible for rejecting empty names. checked_at is
        stamped with the current time.

        Returns:
            The id generated by storage, read back from the same INSERT.
        """
        try:
            result = await self.session.execute(
                insert(Person)
                .values(
                    name=name,
                    is_nice=is_nice,
                    reason=reason or "",
                    checked_at=utcnow(),
                )
                .returning(Person.id)
            )
            person_id = result.scalar_one()
            await self._commit()
        except STORAGE_ERRORS as e:
            await self._fail(e, "Could not add the person. Please try again.")

        logger.info("Person %d added (is_nice=%s)", person_id, is_nice)
        return person_id

    async def judge_person(
        self,
        person_id: int,
        is_nice: bool,
        reason: Optional[str] = None,
    ) -> None:
        """
        Overwrite a person's verdict and stamp checked_at with the current time.

        An omitted reason clears the previous one. checked_at never moves
        backwards: a stored value later than the clock is kept. Succeeds even
        when no person has this id.
        """
        now = literal(utcnow(), UTCDateTime())
        try:
            result = await self.session.execute(
                update(Person)
                .where(Person.id == person_id)
                .values(
                    is_nice=is_nice,
                    reason=reason or "",
                    checked_at=case(
                        (Person.checked_at > now, Person.checked_at),
                        else_=now,
                    ),
                )
            )
            await self._commit()
        except STORAGE_ERRORS as e:
            await self._fail(
                e,
                "Could not record the judgement. Please try again.",
                context={"person_id": person_id},
            )

        if result.rowcount == 0:
            logger.debug("Judgement for unknown person %d matched no rows", person_id)
        else:
            logger.info("Person %d judged %s", person_id, "nice" if is_nice else "naughty")

    async def delete_person(self, person_id: int) -> None:
        """
        Remove a person from the list.

        Storage cascades the delete to every infraction and appeal that
        references them. Succeeds even when no person has this id.
        """
        try:
            result = await self.session.execute(
                delete(Person).where(Person.id == person_id)
            )
            await self._commit()
        except STORAGE_ERRORS as e:
            await self._fail(
                e,
                "Could not delete the person. Please try again.",
                context={"person_id": person_id},
            )

        if result.rowcount == 0:
            logger.debug("Delete for unknown person %d matched no rows", person_id)
        else:
            logger.info("Person %d deleted", person_id)
