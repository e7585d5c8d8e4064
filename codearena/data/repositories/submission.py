from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.config import logger
from codearena.data.schemas import Problem, Submission, Verdict
from codearena.errors import BadRequestException, ResourceNotFoundException

submission_logger = logger.getChild("submission_repository")


async def create_submission(
    db: AsyncSession,
    user_id: UUID,
    problem_id: UUID,
    problem_number: int,
    code: str,
    language: str,
) -> Submission:
    """Persist a new attempt in the Pending state."""
    submission = Submission(
        user_id=user_id,
        problem_id=problem_id,
        problem_number=problem_number,
        code=code,
        language=language,
        verdict=Verdict.PENDING.value,
    )
    db.add(submission)
    await db.commit()
    await db.refresh(submission)
    submission_logger.info(
        f"Created pending submission {submission.id} for problem #{problem_number}"
    )
    return submission


async def update_submission_result(
    db: AsyncSession,
    submission_id: UUID,
    verdict: Verdict,
    execution_time: float,
    memory: float,
    details: Optional[Dict[str, Any]],
) -> Submission:
    """Record the final verdict of a pending submission; the caller commits."""
    submission = await db.get(Submission, submission_id)
    if not submission:
        submission_logger.warning(f"Submission not found: ID {submission_id}")
        raise ResourceNotFoundException(detail="Submission not found")
    if not Verdict(verdict).is_terminal:
        raise ValueError(f"Cannot record non-terminal verdict {Verdict(verdict).value}")
    if Verdict(submission.verdict).is_terminal:
        raise BadRequestException(detail="Submission has already been judged")

    submission.verdict = Verdict(verdict).value
    submission.execution_time = execution_time
    submission.memory = memory
    submission.details = details
    submission.updated_at = datetime.now()
    db.add(submission)
    await db.flush()
    return submission


async def get_submission_by_id(db: AsyncSession, submission_id: UUID) -> Optional[Submission]:
    return await db.get(Submission, submission_id)


async def get_submission_with_problem(
    db: AsyncSession, submission_id: UUID
) -> Optional[Tuple[Submission, Optional[Problem]]]:
    result = await db.execute(
        select(Submission, Problem)
        .outerjoin(Problem, Problem.id == Submission.problem_id)
        .where(Submission.id == submission_id)
    )
    row = result.first()
    if row is None:
        return None
    return row[0], row[1]


async def list_user_submissions(
    db: AsyncSession, user_id: UUID, limit: int = 100, offset: int = 0
) -> List[Submission]:
    """Submissions of one user, most recent first."""
    result = await db.execute(
        select(Submission)
        .where(Submission.user_id == user_id)
        .order_by(Submission.created_at.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all())


async def list_user_submissions_with_problem(
    db: AsyncSession, user_id: UUID, limit: int = 100, offset: int = 0
) -> List[Tuple[Submission, Optional[Problem]]]:
    result = await db.execute(
        select(Submission, Problem)
        .outerjoin(Problem, Problem.id == Submission.problem_id)
        .where(Submission.user_id == user_id)
        .order_by(Submission.created_at.desc())
        .limit(limit)
        .offset(offset)
    )
    return [(row[0], row[1]) for row in result.all()]


async def list_user_submissions_since(
    db: AsyncSession, user_id: UUID, since: datetime
) -> List[Submission]:
    result = await db.execute(
        select(Submission)
        .where(Submission.user_id == user_id)
        .where(Submission.created_at >= since)
        .order_by(Submission.created_at.asc())
    )
    return list(result.scalars().all())


async def exists_accepted_for(
    db: AsyncSession,
    user_id: UUID,
    problem_id: UUID,
    exclude_id: Optional[UUID] = None,
) -> bool:
    """Whether the user already has an Accepted submission for the problem."""
    query = (
        select(Submission.id)
        .where(Submission.user_id == user_id)
        .where(Submission.problem_id == problem_id)
        .where(Submission.verdict == Verdict.ACCEPTED.value)
    )
    if exclude_id is not None:
        query = query.where(Submission.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.first() is not None


async def count_user_submissions_by_verdict(
    db: AsyncSession, user_id: UUID
) -> Dict[str, int]:
    result = await db.execute(
        select(Submission.verdict, func.count())
        .where(Submission.user_id == user_id)
        .group_by(Submission.verdict)
    )
    return {verdict: count for verdict, count in result.all()}


async def list_accepted_dates(db: AsyncSession, user_id: UUID) -> List[datetime]:
    """Creation times of every Accepted submission of the user."""
    result = await db.execute(
        select(Submission.created_at)
        .where(Submission.user_id == user_id)
        .where(Submission.verdict == Verdict.ACCEPTED.value)
    )
    return list(result.scalars().all())
