"""
Nice List Backend — Appeal Repository (Approval Workflow)
===========================================================

What:  Submitting, listing and reviewing appeals against infractions.
Who:   Called by the /api/appeals route handlers.

Workflow:
    submit_appeal()  → new row in PENDING
    list_pending()   → the review queue, newest first
    review_appeal()  → PENDING → APPROVED | DENIED

review_appeal only touches rows that are still PENDING, so a decided appeal
keeps its first decision. Like the other mutations it reports success when
nothing matched: an unknown id or an already-reviewed appeal is not an error.
"""

import logging
from typing import List

from sqlalchemy import desc, insert, select, update

from nicelist.models.appeal import Appeal, AppealStatus
from nicelist.models.types import utcnow
from nicelist.repositories.base import STORAGE_ERRORS, Repository

logger = logging.getLogger(__name__)


class AppealRepository(Repository):
    """Data access for appeals and their review state."""

    async def submit_appeal(
        self,
        person_id: int,
        infraction_id: int,
        appeal_text: str,
    ) -> int:
        """
        File an appeal in PENDING state.

        Raises:
            ReferentialIntegrityError: the person or the infraction does not exist
            DatabaseError: any other storage failure
        """
        try:
            result = await self.session.execute(
                insert(Appeal)
                .values(
                    person_id=person_id,
                    infraction_id=infraction_id,
                    appeal_text=appeal_text,
                    status=AppealStatus.PENDING.value,
                    submitted_at=utcnow(),
                )
                .returning(Appeal.id)
            )
            appeal_id = result.scalar_one()
            await self._commit()
        except STORAGE_ERRORS as e:
            await self._fail(
                e,
                "Could not submit the appeal. Please try again.",
                context={"person_id": person_id, "infraction_id": infraction_id},
                integrity_message=(
                    f"Person '{person_id}' or infraction '{infraction_id}' does not exist"
                ),
            )

        logger.info(
            "Appeal %d submitted by person %d against infraction %d",
            appeal_id,
            person_id,
            infraction_id,
        )
        return appeal_id

    async def list_pending(self) -> List[Appeal]:
        """Appeals awaiting review, ordered by submitted_at descending."""
        try:
            result = await self.session.execute(
                select(Appeal)
                .where(Appeal.status == AppealStatus.PENDING.value)
                .order_by(desc(Appeal.submitted_at), desc(Appeal.id))
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())
        except STORAGE_ERRORS as e:
            await self._fail(e, "Could not retrieve pending appeals. Please try again.")

    async def review_appeal(self, appeal_id: int, approved: bool) -> None:
        """
        Decide a pending appeal: APPROVED when approved is true, else DENIED.

        Rows that are not PENDING are left alone. Succeeds even when no row
        matched.
        """
        new_status = AppealStatus.from_decision(approved)
        try:
            result = await self.session.execute(
                update(Appeal)
                .where(
                    Appeal.id == appeal_id,
                    Appeal.status == AppealStatus.PENDING.value,
                )
                .values(status=new_status.value)
            )
            await self._commit()
        except STORAGE_ERRORS as e:
            await self._fail(
                e,
                "Could not review the appeal. Please try again.",
                context={"appeal_id": appeal_id},
            )

        if result.rowcount == 0:
            logger.debug("Review of appeal %d matched no pending row", appeal_id)
        else:
            logger.info("Appeal %d %s", appeal_id, new_status.name.lower())
