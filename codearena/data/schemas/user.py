from datetime import datetime
from typing import Optional

from sqlalchemy import INTEGER, Column, DateTime, String
from sqlmodel import Field

from codearena.data.schemas.base import BaseModel
from codearena.data.schemas.enums import UserRole


class User(BaseModel, table=True):
    """Database model for a user and the aggregate practice statistics."""

    __tablename__ = "users"

    username: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False),
        description="Unique username for the user.",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False),
        description="Unique email address used to log in.",
    )
    password_hash: str = Field(
        sa_column=Column(String(256), nullable=False),
        exclude=True,
        description="Hashed user password.",
    )
    role: UserRole = Field(
        default=UserRole.USER,
        sa_column=Column(String(20), default=UserRole.USER.value, nullable=False),
    )
    total_submissions: int = Field(
        default=0,
        sa_column=Column(INTEGER, default=0, nullable=False),
        description="Number of judged submissions, accepted or not.",
    )
    total_solved: int = Field(
        default=0,
        sa_column=Column(INTEGER, default=0, nullable=False),
        description="Number of distinct problems with an Accepted submission.",
    )
    last_solved_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="Time of the most recent first solve.",
    )
    refresh_token: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True, default=None),
        exclude=True,
        description="JWT refresh token for the user.",
    )
