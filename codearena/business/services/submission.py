from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.business.services.language import get_language_id, normalize_language
from codearena.business.services.user_stats import UserStatsService
from codearena.business.services.verdict import map_judge0_status
from codearena.config import logger
from codearena.data.repositories import (
    Judge0Client,
    create_submission,
    get_problem_by_id,
    get_submission_with_problem,
    get_user_by_id,
    list_user_submissions_with_problem,
    update_submission_result,
)
from codearena.data.schemas import (
    Problem,
    ProblemSummary,
    Submission,
    SubmissionDetail,
    Verdict,
)
from codearena.errors import (
    AppException,
    DatabaseException,
    JudgeUnavailableException,
    ResourceNotFoundException,
)

# Create a module-specific logger
submission_logger = logger.getChild("submission")


def _as_number(value) -> float:
    """Judge0 reports time as a string and memory as an int; either may be null."""
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def to_submission_detail(submission: Submission, problem: Optional[Problem]) -> SubmissionDetail:
    detail = SubmissionDetail.model_validate(submission)
    if problem is not None:
        detail.problem = ProblemSummary.model_validate(problem)
    return detail


class SubmissionService:
    def __init__(self, judge_client: Judge0Client):
        self.judge_client = judge_client

    async def submit(
        self,
        db: AsyncSession,
        user_id: UUID,
        problem_id: UUID,
        code: str,
        language: str,
    ) -> Submission:
        """
        Judge a solution and record the outcome.

        Args:
            db: Database session
            user_id: The ID of the user submitting the solution
            problem_id: The ID of the problem
            code: The solution code
            language: The programming language name

        Returns:
            The submission with its final verdict

        Raises:
            ResourceNotFoundException: the problem or the user does not exist
            UnsupportedLanguageException: the language is not judged
            JudgeUnavailableException: the judge call failed; the record is
                left in Internal Error
            DatabaseException: persistence failed; a record that was already
                created is left in Internal Error
        """
        submission_logger.info(
            f"Solution submission: Problem ID {problem_id}, User ID {user_id}, Language: {language}"
        )

        problem = await get_problem_by_id(db, problem_id)
        language_id = get_language_id(language)
        # Tokens can outlive their account
        await get_user_by_id(db, user_id)

        try:
            submission = await create_submission(
                db,
                user_id=user_id,
                problem_id=problem.id,
                problem_number=problem.problem_number,
                code=code,
                language=normalize_language(language).value,
            )
        except SQLAlchemyError as e:
            await db.rollback()
            submission_logger.error(f"Database error creating submission: {str(e)}")
            raise DatabaseException(detail="Error submitting code", error=str(e))

        submission_id = submission.id
        try:
            result = await self.judge_client.submit_and_wait(
                source_code=code,
                language_id=language_id,
                stdin=problem.input_example or "",
                expected_output=problem.expected_output or "",
            )
        except JudgeUnavailableException as e:
            submission_logger.error(
                f"Judge unavailable for submission {submission_id}: {e.error}"
            )
            await self._mark_internal_error(db, submission_id, str(e.error))
            raise

        verdict = map_judge0_status(result.get("status"))
        try:
            submission = await update_submission_result(
                db,
                submission_id,
                verdict=verdict,
                execution_time=_as_number(result.get("time")),
                memory=_as_number(result.get("memory")),
                details=result,
            )
            await UserStatsService.apply_result(db, user_id, problem.id, verdict)
            await db.refresh(submission)
        except AppException as e:
            await db.rollback()
            submission_logger.error(
                f"Could not record result of submission {submission_id}: {e.detail}"
            )
            await self._mark_internal_error(db, submission_id, e.detail)
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            submission_logger.error(
                f"Database error recording result of submission {submission_id}: {str(e)}"
            )
            await self._mark_internal_error(db, submission_id, str(e))
            raise DatabaseException(detail="Error submitting code", error=str(e))

        submission_logger.info(
            f"Submission {submission.id} judged: {verdict.value} "
            f"({submission.execution_time}s, {submission.memory}KB)"
        )
        return submission

    async def _mark_internal_error(
        self, db: AsyncSession, submission_id: UUID, error: str
    ) -> None:
        try:
            await update_submission_result(
                db,
                submission_id,
                verdict=Verdict.INTERNAL_ERROR,
                execution_time=0,
                memory=0,
                details={"error": error},
            )
            await db.commit()
        except AppException as e:
            await db.rollback()
            submission_logger.error(
                f"Could not mark submission {submission_id} as failed: {e.detail}"
            )
        except SQLAlchemyError as e:
            await db.rollback()
            submission_logger.error(
                f"Could not mark submission {submission_id} as failed: {str(e)}"
            )

    @staticmethod
    async def get_submission(
        db: AsyncSession, submission_id: UUID, user_id: UUID
    ) -> Tuple[Submission, Optional[Problem]]:
        row = await get_submission_with_problem(db, submission_id)
        if row is None or row[0].user_id != user_id:
            submission_logger.warning(
                f"Submission {submission_id} not found for user {user_id}"
            )
            raise ResourceNotFoundException(detail="Submission not found")
        return row

    @staticmethod
    async def list_submissions(
        db: AsyncSession, user_id: UUID, limit: int = 100, offset: int = 0
    ) -> List[Tuple[Submission, Optional[Problem]]]:
        submissions = await list_user_submissions_with_problem(db, user_id, limit, offset)
        submission_logger.info(f"Retrieved {len(submissions)} submissions for user {user_id}")
        return submissions
