"""Dependencies that hand each route a repository bound to the request's session."""

from typing import Annotated

from fastapi import Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from nicelist.database import get_db_session
from nicelist.repositories import AppealRepository, InfractionRepository, PersonRepository
from nicelist.schemas.common import MAX_ROW_ID, MIN_ROW_ID

# Path id limited to the storage INTEGER range
RowId = Annotated[int, Path(ge=MIN_ROW_ID, le=MAX_ROW_ID)]


def get_person_repository(db: AsyncSession = Depends(get_db_session)) -> PersonRepository:
    return PersonRepository(db)


def get_infraction_repository(
    db: AsyncSession = Depends(get_db_session),
) -> InfractionRepository:
    return InfractionRepository(db)


def get_appeal_repository(db: AsyncSession = Depends(get_db_session)) -> AppealRepository:
    return AppealRepository(db)
