from datetime import datetime
from typing import List, Tuple
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.config import logger
from codearena.data.schemas import SolvedProblem, User
from codearena.errors import DatabaseException, ResourceNotFoundException

user_logger = logger.getChild("user")


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User:
    """Get a user by ID from the database."""
    try:
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
    except Exception as e:
        user_logger.error(f"Error retrieving user {user_id}: {str(e)}")
        raise DatabaseException(
            detail="Failed to retrieve user due to database error", error=str(e)
        )
    if not user:
        user_logger.warning(f"User not found: ID {user_id}")
        raise ResourceNotFoundException(detail="User not found")
    return user


async def increment_total_submissions(db: AsyncSession, user_id: UUID) -> None:
    """Bump the submission counter in place; the caller commits."""
    result = await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(total_submissions=User.total_submissions + 1)
    )
    if result.rowcount == 0:
        raise ResourceNotFoundException(detail="User not found")


def _insert_for(db: AsyncSession):
    if db.get_bind().dialect.name == "postgresql":
        return postgresql.insert
    return sqlite.insert


async def mark_problem_solved(
    db: AsyncSession, user_id: UUID, problem_id: UUID, solved_at: datetime
) -> bool:
    """
    Record that a user solved a problem.

    Returns True only for the call that actually inserted the row, so two
    concurrent accepted submissions cannot both claim the first solve.
    """
    insert = _insert_for(db)
    stmt = (
        insert(SolvedProblem)
        .values(user_id=user_id, problem_id=problem_id, solved_at=solved_at)
        .on_conflict_do_nothing(index_elements=["user_id", "problem_id"])
    )
    result = await db.execute(stmt)
    return result.rowcount == 1


async def credit_first_solve(db: AsyncSession, user_id: UUID, solved_at: datetime) -> None:
    await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(total_solved=User.total_solved + 1, last_solved_at=solved_at)
    )


async def get_leaderboard(
    db: AsyncSession, limit: int = 100, offset: int = 0
) -> Tuple[List[User], int]:
    """
    Get users ordered by solved count for the leaderboard.

    Ties are broken by who reached the count first, then by fewer submissions.
    """
    try:
        count_result = await db.execute(select(func.count()).select_from(User))
        total = count_result.scalar_one()

        query = (
            select(User)
            .order_by(
                User.total_solved.desc(),
                User.last_solved_at.asc().nulls_last(),
                User.total_submissions.asc(),
                User.username.asc(),
            )
            .offset(offset)
            .limit(limit)
        )
        result = await db.execute(query)
        users = result.scalars().all()

        user_logger.info(f"Retrieved {len(users)} users for leaderboard (total: {total})")
        return list(users), total
    except Exception as e:
        user_logger.error(f"Error retrieving leaderboard: {str(e)}")
        raise DatabaseException(
            detail="Failed to retrieve leaderboard due to database error", error=str(e)
        )


async def get_user_rank(db: AsyncSession, user: User) -> int:
    """1-based position of the user by solved count."""
    result = await db.execute(
        select(func.count()).select_from(User).where(User.total_solved > user.total_solved)
    )
    return result.scalar_one() + 1
