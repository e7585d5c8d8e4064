from collections import Counter
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from codearena.business.services.submission import to_submission_detail
from codearena.config import logger
from codearena.data.repositories import (
    count_user_submissions_by_verdict,
    get_leaderboard,
    get_user_by_id,
    get_user_rank,
    list_accepted_dates,
    list_user_submissions_since,
    list_user_submissions_with_problem,
)
from codearena.data.schemas import (
    ActivityEntry,
    DashboardResponse,
    LeaderboardEntry,
    LeaderboardResponse,
    Verdict,
)
from codearena.errors import AppException, DatabaseException

# Create a module-specific logger
dashboard_logger = logger.getChild("dashboard")

ACTIVITY_DAYS = 30
RECENT_SUBMISSIONS = 5


def compute_streak(solved_days: Iterable[date], today: Optional[date] = None) -> int:
    """
    Number of consecutive days with at least one Accepted submission.

    The run may end today or yesterday; a streak is not broken until a full
    day passes without a solve.
    """
    today = today or date.today()
    days = set(solved_days)
    if today in days:
        cursor = today
    elif today - timedelta(days=1) in days:
        cursor = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def acceptance_rate(accepted: int, judged: int) -> float:
    """
    Percentage of judged submissions that were accepted.

    ``judged`` is the user's ``total_submissions``, which leaves out records
    the judge never answered for.
    """
    if judged <= 0:
        return 0.0
    return round(accepted * 100 / judged, 1)


def build_activity(submissions, today: date, days: int = ACTIVITY_DAYS) -> List[ActivityEntry]:
    """Per-day submission and accepted counts for the last ``days`` days, oldest first."""
    submitted = Counter(s.created_at.date() for s in submissions)
    solved = Counter(
        s.created_at.date() for s in submissions if s.verdict == Verdict.ACCEPTED.value
    )
    start = today - timedelta(days=days - 1)
    return [
        ActivityEntry(
            date=start + timedelta(days=offset),
            submissions=submitted.get(start + timedelta(days=offset), 0),
            solved=solved.get(start + timedelta(days=offset), 0),
        )
        for offset in range(days)
    ]


async def get_dashboard_service(db: AsyncSession, user_id: UUID) -> DashboardResponse:
    """
    Aggregate the caller's progress for the dashboard.

    Args:
        db: Database session
        user_id: ID of the user

    Returns:
        DashboardResponse with totals, acceptance rate, streak, rank and
        recent activity
    """
    try:
        user = await get_user_by_id(db, user_id)
        today = date.today()

        verdict_counts = await count_user_submissions_by_verdict(db, user_id)
        accepted_at = await list_accepted_dates(db, user_id)
        since = datetime.combine(today - timedelta(days=ACTIVITY_DAYS - 1), datetime.min.time())
        window = await list_user_submissions_since(db, user_id, since)
        recent = await list_user_submissions_with_problem(db, user_id, RECENT_SUBMISSIONS, 0)
        rank = await get_user_rank(db, user)

        dashboard = DashboardResponse(
            username=user.username,
            welcome_message=f"Welcome back, {user.username}!",
            total_solved=user.total_solved,
            total_submissions=user.total_submissions,
            acceptance_rate=acceptance_rate(
                verdict_counts.get(Verdict.ACCEPTED.value, 0), user.total_submissions
            ),
            current_streak=compute_streak((d.date() for d in accepted_at), today),
            rank=rank,
            last_solved_at=user.last_solved_at,
            activity=build_activity(window, today),
            recent_submissions=[to_submission_detail(s, p) for s, p in recent],
        )
        dashboard_logger.info(f"Dashboard built for user {user_id}")
        return dashboard
    except AppException:
        raise
    except Exception as e:
        dashboard_logger.error(f"Error building dashboard for user {user_id}: {str(e)}")
        raise DatabaseException(detail="Failed to build dashboard", error=str(e))


async def get_leaderboard_service(
    db: AsyncSession, limit: int = 100, offset: int = 0
) -> LeaderboardResponse:
    dashboard_logger.info(f"Getting leaderboard with limit={limit}, offset={offset}")
    users, total = await get_leaderboard(db, limit, offset)

    entries = [
        LeaderboardEntry(
            rank=offset + index + 1,
            id=user.id,
            username=user.username,
            total_solved=user.total_solved,
            total_submissions=user.total_submissions,
            last_solved_at=user.last_solved_at,
        )
        for index, user in enumerate(users)
    ]
    return LeaderboardResponse(users=entries, total=total)
