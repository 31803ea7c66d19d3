"""
Nice List Backend — Appeal Repository Tests
=============================================

What we test:
    ✅ submit_appeal always starts PENDING
    ✅ review(true) → APPROVED and leaves the pending queue
    ✅ review(false) → DENIED
    ✅ decided appeals keep their first decision
    ✅ reviewing an unknown id succeeds silently
    ✅ dangling person/infraction ids raise ReferentialIntegrityError
    ✅ pending queue is newest first
"""

import pytest
from sqlalchemy import select

from nicelist.exceptions import ReferentialIntegrityError
from nicelist.models import Appeal, AppealStatus
from nicelist.repositories import AppealRepository, InfractionRepository, PersonRepository


async def _status_of(session, appeal_id):
    result = await session.execute(
        select(Appeal.status).where(Appeal.id == appeal_id)
    )
    return AppealStatus(result.scalar_one())


@pytest.fixture
def appeals(db_session):
    return AppealRepository(db_session)


async def _person_with_infraction(session, name="Ralphie"):
    person_id = await PersonRepository(session).add_person(name)
    infraction_id = await InfractionRepository(session).add_infraction(
        person_id, "Said a bad word", 2
    )
    return person_id, infraction_id


class TestAppealStatus:

    def test_from_decision(self):
        assert AppealStatus.from_decision(True) is AppealStatus.APPROVED
        assert AppealStatus.from_decision(False) is AppealStatus.DENIED

    def test_wire_values(self):
        assert [s.value for s in AppealStatus] == [0, 1, 2]


class TestSubmitAppeal:

    @pytest.mark.asyncio
    async def test_submit_creates_pending(self, db_session, appeals):
        person_id, infraction_id = await _person_with_infraction(db_session)

        appeal_id = await appeals.submit_appeal(person_id, infraction_id, "It was soap")
        pending = await appeals.list_pending()

        assert [a.id for a in pending] == [appeal_id]
        assert pending[0].status == AppealStatus.PENDING
        assert pending[0].appeal_text == "It was soap"
        assert pending[0].person_id == person_id
        assert pending[0].infraction_id == infraction_id

    @pytest.mark.asyncio
    async def test_submit_unknown_infraction(self, db_session, appeals):
        person_id, _ = await _person_with_infraction(db_session)

        with pytest.raises(ReferentialIntegrityError):
            await appeals.submit_appeal(person_id, 9999, "Never happened")

    @pytest.mark.asyncio
    async def test_submit_unknown_person(self, db_session, appeals):
        _, infraction_id = await _person_with_infraction(db_session)

        with pytest.raises(ReferentialIntegrityError) as exc_info:
            await appeals.submit_appeal(9999, infraction_id, "Who am I")

        assert exc_info.value.context["infraction_id"] == infraction_id

    @pytest.mark.asyncio
    async def test_pending_newest_first(self, db_session, appeals):
        person_id, infraction_id = await _person_with_infraction(db_session)

        ids = [
            await appeals.submit_appeal(person_id, infraction_id, text)
            for text in ("First try", "Second try", "Third try")
        ]

        assert [a.id for a in await appeals.list_pending()] == list(reversed(ids))


class TestReviewAppeal:

    @pytest.mark.asyncio
    async def test_approve_removes_from_pending(self, db_session, appeals):
        person_id, infraction_id = await _person_with_infraction(db_session)
        appeal_id = await appeals.submit_appeal(person_id, infraction_id, "I was framed")

        await appeals.review_appeal(appeal_id, True)

        assert await appeals.list_pending() == []
        assert await _status_of(db_session, appeal_id) is AppealStatus.APPROVED

    @pytest.mark.asyncio
    async def test_deny(self, db_session, appeals):
        person_id, infraction_id = await _person_with_infraction(db_session)
        appeal_id = await appeals.submit_appeal(person_id, infraction_id, "The dog did it")

        await appeals.review_appeal(appeal_id, False)

        assert await appeals.list_pending() == []
        assert await _status_of(db_session, appeal_id) is AppealStatus.DENIED

    @pytest.mark.asyncio
    async def test_decided_appeal_keeps_first_decision(self, db_session, appeals):
        """A second review is acknowledged but changes nothing."""
        person_id, infraction_id = await _person_with_infraction(db_session)
        appeal_id = await appeals.submit_appeal(person_id, infraction_id, "Please")

        await appeals.review_appeal(appeal_id, False)
        await appeals.review_appeal(appeal_id, True)

        assert await _status_of(db_session, appeal_id) is AppealStatus.DENIED

    @pytest.mark.asyncio
    async def test_review_unknown_appeal_is_silent(self, db_session, appeals):
        person_id, infraction_id = await _person_with_infraction(db_session)
        appeal_id = await appeals.submit_appeal(person_id, infraction_id, "Still waiting")

        await appeals.review_appeal(9999, True)

        assert [a.id for a in await appeals.list_pending()] == [appeal_id]

    @pytest.mark.asyncio
    async def test_review_only_touches_target(self, db_session, appeals):
        person_id, infraction_id = await _person_with_infraction(db_session)
        first = await appeals.submit_appeal(person_id, infraction_id, "One")
        second = await appeals.submit_appeal(person_id, infraction_id, "Two")

        await appeals.review_appeal(first, True)

        assert [a.id for a in await appeals.list_pending()] == [second]
