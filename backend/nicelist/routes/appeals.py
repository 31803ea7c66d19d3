"""
Nice List Backend — Appeal Route Handlers
===========================================

What:  Submitting appeals, viewing the pending queue, and reviewing.

Review answers {"ok": true} whether or not the appeal exists or is still
pending; only a pending appeal actually changes state.
"""

from typing import List

from fastapi import APIRouter, Depends

from nicelist.repositories import AppealRepository
from nicelist.routes.deps import RowId, get_appeal_repository
from nicelist.schemas.appeal import AppealCreate, AppealResponse, AppealReview
from nicelist.schemas.common import ErrorResponse, IdResponse, OkResponse

router = APIRouter(prefix="/api", tags=["Appeals"])


@router.post(
    "/appeals",
    status_code=201,
    response_model=IdResponse,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        409: {"description": "Person or infraction does not exist", "model": ErrorResponse},
    },
    summary="Submit an appeal against an infraction",
)
async def submit_appeal(
    body: AppealCreate,
    repo: AppealRepository = Depends(get_appeal_repository),
) -> IdResponse:
    appeal_id = await repo.submit_appeal(
        person_id=body.person_id,
        infraction_id=body.infraction_id,
        appeal_text=body.appeal_text,
    )
    return IdResponse(id=appeal_id)


@router.get(
    "/appeals/pending",
    response_model=List[AppealResponse],
    summary="List appeals awaiting judgement",
    description="Pending appeals only, most recently submitted first.",
)
async def list_pending_appeals(
    repo: AppealRepository = Depends(get_appeal_repository),
) -> List[AppealResponse]:
    appeals = await repo.list_pending()
    return [AppealResponse.model_validate(appeal) for appeal in appeals]


@router.patch(
    "/appeals/{appeal_id}/review",
    response_model=OkResponse,
    responses={400: {"description": "approved missing or not a boolean", "model": ErrorResponse}},
    summary="Approve or deny an appeal",
)
async def review_appeal(
    appeal_id: RowId,
    body: AppealReview,
    repo: AppealRepository = Depends(get_appeal_repository),
) -> OkResponse:
    await repo.review_appeal(appeal_id, approved=body.approved)
    return OkResponse()
