"""
Nice List Backend — Infraction Route Handlers
===============================================

What:  Viewing and recording the naughty deeds of one person.

Recording against an unknown person is rejected by the storage foreign key
and answered with 409, never with a fabricated id.
"""

from typing import List

from fastapi import APIRouter, Depends

from nicelist.repositories import InfractionRepository
from nicelist.routes.deps import RowId, get_infraction_repository
from nicelist.schemas.common import ErrorResponse, IdResponse
from nicelist.schemas.infraction import InfractionCreate, InfractionResponse

router = APIRouter(prefix="/api", tags=["Infractions"])


@router.get(
    "/people/{person_id}/infractions",
    response_model=List[InfractionResponse],
    summary="List a person's infractions",
    description="Newest first. An unknown person yields an empty list.",
)
async def list_infractions(
    person_id: RowId,
    repo: InfractionRepository = Depends(get_infraction_repository),
) -> List[InfractionResponse]:
    infractions = await repo.list_for_person(person_id)
    return [InfractionResponse.model_validate(item) for item in infractions]


@router.post(
    "/people/{person_id}/infractions",
    status_code=201,
    response_model=IdResponse,
    responses={
        400: {"description": "Missing description or severity out of range", "model": ErrorResponse},
        409: {"description": "Person does not exist", "model": ErrorResponse},
    },
    summary="Record an infraction",
)
async def add_infraction(
    person_id: RowId,
    body: InfractionCreate,
    repo: InfractionRepository = Depends(get_infraction_repository),
) -> IdResponse:
    infraction_id = await repo.add_infraction(
        person_id=person_id,
        description=body.description,
        severity=body.severity,
    )
    return IdResponse(id=infraction_id)
