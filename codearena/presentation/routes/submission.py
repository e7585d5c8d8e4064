from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.business.services import SubmissionService, get_current_user
from codearena.business.services.submission import to_submission_detail
from codearena.config import logger
from codearena.data.repositories import Judge0Client, get_judge_client, get_session
from codearena.data.schemas import (
    SubmissionCreate,
    SubmissionDetail,
    SubmissionResponse,
    SubmissionResult,
    UserBaseResponse,
)

submission_logger = logger.getChild("submission")
submission_router = APIRouter(prefix="/submissions", tags=["submissions"])


def get_submission_service(
    judge_client: Judge0Client = Depends(get_judge_client),
) -> SubmissionService:
    return SubmissionService(judge_client)


@submission_router.post(
    "",
    response_model=SubmissionResult,
    summary="Submit a solution",
    description="Runs the solution on the judge against the problem's sample, stores the verdict and updates the caller's statistics."
)
async def submit_solution(
    submission_data: SubmissionCreate,
    db: AsyncSession = Depends(get_session),
    current_user: UserBaseResponse = Depends(get_current_user),
    service: SubmissionService = Depends(get_submission_service),
):
    submission_logger.info(
        f"Processing submission for problem ID: {submission_data.problem_id}"
    )
    submission = await service.submit(
        db,
        user_id=current_user.id,
        problem_id=submission_data.problem_id,
        code=submission_data.code,
        language=submission_data.language,
    )
    return SubmissionResult(
        message="Submission completed",
        submission=SubmissionResponse.model_validate(submission),
    )


@submission_router.get(
    "/user",
    response_model=list[SubmissionDetail],
    summary="List my submissions",
    description="Returns the caller's submissions, most recent first, with problem metadata."
)
async def get_submissions_by_user(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
    current_user: UserBaseResponse = Depends(get_current_user),
):
    rows = await SubmissionService.list_submissions(db, current_user.id, limit, offset)
    return [to_submission_detail(submission, problem) for submission, problem in rows]


@submission_router.get(
    "/{submission_id}",
    response_model=SubmissionDetail,
    summary="Get a submission",
    description="Returns one of the caller's submissions with problem metadata."
)
async def get_submission_result(
    submission_id: UUID,
    db: AsyncSession = Depends(get_session),
    current_user: UserBaseResponse = Depends(get_current_user),
):
    submission, problem = await SubmissionService.get_submission(
        db, submission_id, current_user.id
    )
    return to_submission_detail(submission, problem)
