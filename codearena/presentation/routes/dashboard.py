from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.business.services import (
    get_current_user,
    get_dashboard_service,
    get_leaderboard_service,
)
from codearena.config import logger
from codearena.data.repositories import get_session
from codearena.data.schemas import DashboardResponse, LeaderboardResponse, UserBaseResponse

dashboard_logger = logger.getChild("dashboard")

router = APIRouter(tags=["dashboard"])


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Progress dashboard",
)
async def get_dashboard(
    db: AsyncSession = Depends(get_session),
    current_user: UserBaseResponse = Depends(get_current_user),
):
    dashboard_logger.info(f"Dashboard request for user {current_user.id}")
    return await get_dashboard_service(db, current_user.id)


@router.get(
    "/leaderboard",
    response_model=LeaderboardResponse,
)
async def get_leaderboard(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
):
    """
    Get users ranked by number of solved problems.

    Args:
        limit: Maximum number of users to return (default: 100, max: 1000)
        offset: Number of users to skip (default: 0)
        db: Database session

    Returns:
        Ranked users and the total user count
    """
    dashboard_logger.info(f"Leaderboard request with limit={limit}, offset={offset}")
    leaderboard = await get_leaderboard_service(db, limit, offset)
    dashboard_logger.info(f"Leaderboard request successful: {len(leaderboard.users)} entries")
    return leaderboard
