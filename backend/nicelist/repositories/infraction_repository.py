"""
Nice List Backend — Infraction Repository
===========================================

What:  Recording and listing infractions against a person.
Who:   Called by the /api/people/{id}/infractions route handlers.

Infractions are append-only: there is no update or delete here. They vanish
only through the cascade when their person is deleted.
"""

import logging
from typing import List

from sqlalchemy import desc, insert, select

from nicelist.models.infraction import MIN_SEVERITY, Infraction
from nicelist.models.types import utcnow
from nicelist.repositories.base import STORAGE_ERRORS, Repository

logger = logging.getLogger(__name__)


class InfractionRepository(Repository):
    """Data access for infractions."""

    async def list_for_person(self, person_id: int) -> List[Infraction]:
        """
        A person's infractions, newest first.

        An unknown person simply has no infractions; no NotFoundError is raised.
        """
        try:
            result = await self.session.execute(
                select(Infraction)
                .where(Infraction.person_id == person_id)
                .order_by(desc(Infraction.occurred_at), desc(Infraction.id))
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())
        except STORAGE_ERRORS as e:
            await self._fail(
                e,
                "Could not retrieve infractions. Please try again.",
                context={"person_id": person_id},
            )

    async def add_infraction(
        self,
        person_id: int,
        description: str,
        severity: int = MIN_SEVERITY,
    ) -> int:
        """
        Record a new infraction.

        The person is not looked up first; the foreign key on person_id
        rejects the insert when the person does not exist.

        Returns:
            The generated infraction id.

        Raises:
            ReferentialIntegrityError: person_id does not exist
            DatabaseError: any other storage failure
        """
        try:
            result = await self.session.execute(
                insert(Infraction)
                .values(
                    person_id=person_id,
                    description=description,
                    severity=severity,
                    occurred_at=utcnow(),
                )
                .returning(Infraction.id)
            )
            infraction_id = result.scalar_one()
            await self._commit()
        except STORAGE_ERRORS as e:
            await self._fail(
                e,
                "Could not record the infraction. Please try again.",
                context={"person_id": person_id},
                integrity_message=f"Person with ID '{person_id}' does not exist",
            )

        logger.info(
            "Infraction %d recorded against person %d (severity=%d)",
            infraction_id,
            person_id,
            severity,
        )
        return infraction_id
