import datetime as dt
import uuid
from typing import List, Optional

from pydantic import BaseModel

from codearena.data.schemas.submission import SubmissionDetail


class ActivityEntry(BaseModel):
    date: dt.date
    submissions: int
    solved: int


class DashboardResponse(BaseModel):
    username: str
    welcome_message: str
    total_solved: int
    total_submissions: int
    acceptance_rate: float
    current_streak: int
    rank: int
    last_solved_at: Optional[dt.datetime] = None
    activity: List[ActivityEntry]
    recent_submissions: List[SubmissionDetail]


class LeaderboardEntry(BaseModel):
    """Schema for a single entry in the leaderboard."""

    rank: int
    id: uuid.UUID
    username: str
    total_solved: int
    total_submissions: int
    last_solved_at: Optional[dt.datetime] = None


class LeaderboardResponse(BaseModel):
    users: List[LeaderboardEntry]
    total: int
