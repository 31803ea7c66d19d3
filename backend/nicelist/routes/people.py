"""
Nice List Backend — People Route Handlers
===========================================

What:  CRUD over the naughty & nice list.
How:   Each handler makes exactly one PersonRepository call.

PATCH and DELETE answer {"ok": true} even for ids that do not exist;
only GET /api/people/{id} reports 404.
"""

from typing import List

from fastapi import APIRouter, Depends

from nicelist.repositories import PersonRepository
from nicelist.routes.deps import RowId, get_person_repository
from nicelist.schemas.common import ErrorResponse, IdResponse, OkResponse
from nicelist.schemas.person import PersonCreate, PersonJudgement, PersonResponse

router = APIRouter(prefix="/api", tags=["People"])


@router.get(
    "/people",
    response_model=List[PersonResponse],
    summary="List everyone on the list",
    description="All people with their current verdict, most recently judged first.",
)
async def list_people(
    repo: PersonRepository = Depends(get_person_repository),
) -> List[PersonResponse]:
    people = await repo.list_people()
    return [PersonResponse.model_validate(person) for person in people]


@router.get(
    "/people/{person_id}",
    response_model=PersonResponse,
    responses={
        400: {"description": "Invalid id", "model": ErrorResponse},
        404: {"description": "Person not found", "model": ErrorResponse},
    },
    summary="Get one person",
)
async def get_person(
    person_id: RowId,
    repo: PersonRepository = Depends(get_person_repository),
) -> PersonResponse:
    person = await repo.get_person(person_id)
    return PersonResponse.model_validate(person)


@router.post(
    "/people",
    status_code=201,
    response_model=IdResponse,
    responses={400: {"description": "Missing or empty name", "model": ErrorResponse}},
    summary="Add a person to the list",
)
async def add_person(
    body: PersonCreate,
    repo: PersonRepository = Depends(get_person_repository),
) -> IdResponse:
    person_id = await repo.add_person(
        name=body.name,
        is_nice=body.is_nice,
        reason=body.reason,
    )
    return IdResponse(id=person_id)


@router.patch(
    "/people/{person_id}",
    response_model=OkResponse,
    responses={400: {"description": "isNice missing or not a boolean", "model": ErrorResponse}},
    summary="Judge a person naughty or nice",
)
async def judge_person(
    person_id: RowId,
    body: PersonJudgement,
    repo: PersonRepository = Depends(get_person_repository),
) -> OkResponse:
    await repo.judge_person(person_id, is_nice=body.is_nice, reason=body.reason)
    return OkResponse()


@router.delete(
    "/people/{person_id}",
    response_model=OkResponse,
    responses={400: {"description": "Invalid id", "model": ErrorResponse}},
    summary="Remove a person and everything recorded against them",
)
async def delete_person(
    person_id: RowId,
    repo: PersonRepository = Depends(get_person_repository),
) -> OkResponse:
    await repo.delete_person(person_id)
    return OkResponse()
