from datetime import datetime
from typing import List, Optional

from pydantic import UUID4
from pydantic import BaseModel as PydanticModel
from pydantic import Field as PydanticField
from sqlalchemy import JSON, Column, Integer, String, Text
from sqlmodel import Field

from codearena.data.schemas.base import BaseModel
from codearena.data.schemas.enums import Difficulty


class Problem(BaseModel, table=True):
    """
    Represents a practice problem.
    The sample input and expected output are what the judge runs a
    submission against.
    """

    __tablename__ = "problems"

    problem_number: int = Field(
        sa_column=Column(Integer, unique=True, nullable=False, index=True),
        description="Human-facing problem number.",
    )
    title: str = Field(sa_column=Column(String(200), nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    difficulty: Difficulty = Field(
        default=Difficulty.EASY,
        sa_column=Column(String(10), nullable=False, default=Difficulty.EASY.value),
    )
    category: str = Field(default="General", sa_column=Column(String(100), nullable=False))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    input_example: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))
    expected_output: str = Field(default="", sa_column=Column(Text, nullable=False, default=""))


class ProblemBase(PydanticModel):
    title: str = PydanticField(..., max_length=200)
    description: str = ""
    difficulty: Difficulty = Difficulty.EASY
    category: str = "General"
    tags: List[str] = []
    input_example: str = ""
    expected_output: str = ""


class ProblemCreate(ProblemBase):
    problem_number: Optional[int] = PydanticField(default=None, ge=1)


class ProblemSummary(PydanticModel):
    """Problem fields joined into submission listings."""

    id: UUID4
    title: str
    difficulty: Difficulty
    category: str
    problem_number: int

    model_config = {"from_attributes": True}


class ProblemResponse(ProblemBase):
    id: UUID4
    problem_number: int
    created_at: datetime
    updated_at: datetime
    is_solved: Optional[bool] = None

    model_config = {"from_attributes": True}


class ProblemListResponse(PydanticModel):
    results: List[ProblemResponse]
    total: int
    page: int
    limit: int
