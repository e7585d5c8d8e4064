import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import UUID4
from pydantic import BaseModel as PydanticModel
from pydantic import Field as PydanticField
from sqlalchemy import JSON, Column, DateTime, Float, String, Text
from sqlmodel import Field, SQLModel

from codearena.data.schemas.base import BaseModel
from codearena.data.schemas.enums import Verdict
from codearena.data.schemas.problem import ProblemSummary


class Submission(BaseModel, table=True):
    """A single judged attempt at a problem."""

    __tablename__ = "submissions"

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)
    problem_id: uuid.UUID = Field(foreign_key="problems.id", index=True)
    problem_number: int = Field(description="Denormalized problem number for display.")
    code: str = Field(sa_column=Column(Text, nullable=False))
    language: str = Field(sa_column=Column(String(20), nullable=False))
    verdict: Verdict = Field(
        default=Verdict.PENDING,
        sa_column=Column(String(32), nullable=False, default=Verdict.PENDING.value, index=True),
    )
    execution_time: float = Field(default=0, sa_column=Column(Float, nullable=False, default=0))
    memory: float = Field(default=0, sa_column=Column(Float, nullable=False, default=0))
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column(JSON, nullable=True),
        description="Raw judge response.",
    )


class SolvedProblem(SQLModel, table=True):
    """One row per (user, problem) pair that has reached Accepted."""

    __tablename__ = "solved_problems"

    user_id: uuid.UUID = Field(foreign_key="users.id", primary_key=True)
    problem_id: uuid.UUID = Field(foreign_key="problems.id", primary_key=True)
    solved_at: datetime = Field(
        default_factory=datetime.now,
        sa_column=Column(DateTime, nullable=False),
    )


class SubmissionCreate(PydanticModel):
    problem_id: UUID4 = PydanticField(..., alias="problemId")
    code: str = PydanticField(..., min_length=1)
    language: str = PydanticField(..., min_length=1, max_length=20)

    model_config = {"populate_by_name": True}


class SubmissionResponse(PydanticModel):
    id: UUID4
    user_id: UUID4
    problem_id: UUID4
    problem_number: int
    code: str
    language: str
    verdict: Verdict
    execution_time: float
    memory: float
    details: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SubmissionDetail(SubmissionResponse):
    problem: Optional[ProblemSummary] = None


class SubmissionResult(PydanticModel):
    message: str
    submission: SubmissionResponse
