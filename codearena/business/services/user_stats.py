from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from codearena.config import logger
from codearena.data.repositories import (
    credit_first_solve,
    increment_total_submissions,
    mark_problem_solved,
)
from codearena.data.schemas import Verdict

stats_logger = logger.getChild("user_stats")


class UserStatsService:
    @staticmethod
    async def apply_result(
        db: AsyncSession, user_id: UUID, problem_id: UUID, verdict: Verdict
    ) -> bool:
        """
        Fold one judged submission into the user's counters.

        Args:
            db: Database session
            user_id: Owner of the submission
            problem_id: Problem that was attempted
            verdict: Final verdict of the submission

        Returns:
            True when this submission is the user's first solve of the problem
        """
        await increment_total_submissions(db, user_id)

        first_solve = False
        if verdict == Verdict.ACCEPTED:
            now = datetime.now()
            first_solve = await mark_problem_solved(db, user_id, problem_id, now)
            if first_solve:
                await credit_first_solve(db, user_id, now)

        await db.commit()
        stats_logger.info(
            f"Stats updated for user {user_id}: verdict {Verdict(verdict).value}, "
            f"first solve: {first_solve}"
        )
        return first_solve
