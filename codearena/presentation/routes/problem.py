from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.business.services import get_admin_user, get_optional_user
from codearena.config import logger
from codearena.data.repositories import (
    create_problem_in_db,
    exists_accepted_for,
    get_problem_by_number,
    get_session,
    list_problems_from_db,
)
from codearena.data.schemas import (
    Difficulty,
    ProblemCreate,
    ProblemListResponse,
    ProblemResponse,
    UserBaseResponse,
)

problem_logger = logger.getChild("problem")
problem_router = APIRouter(prefix="/problems", tags=["problems"])


@problem_router.get(
    "",
    response_model=ProblemListResponse,
    summary="List problems",
    description="Lists problems with filtering, search, sorting and pagination."
)
async def list_problems(
    difficulty: Optional[Difficulty] = None,
    category: Optional[str] = None,
    tags: Optional[str] = Query(None, description="Comma-separated tags; all must match"),
    search: Optional[str] = None,
    sort_by: str = Query("problem_number", alias="sortBy"),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_session),
):
    tag_list: List[str] = [t.strip() for t in tags.split(",") if t.strip()] if tags else []
    problem_logger.info(f"Listing problems page {page}, limit {limit}")
    problems, total = await list_problems_from_db(
        db,
        skip=(page - 1) * limit,
        limit=limit,
        difficulty=difficulty,
        category=category,
        tags=tag_list,
        search=search,
        sort_by=sort_by,
        order=order,
    )
    return ProblemListResponse(
        results=[ProblemResponse.model_validate(p) for p in problems],
        total=total,
        page=page,
        limit=limit,
    )


@problem_router.get(
    "/{problem_number}",
    response_model=ProblemResponse,
    summary="Get a problem",
    description="Retrieves a problem by its number; includes whether the caller has solved it when authenticated."
)
async def get_problem(
    problem_number: int,
    db: AsyncSession = Depends(get_session),
    current_user: Optional[UserBaseResponse] = Depends(get_optional_user),
):
    problem_logger.info(f"Fetching problem #{problem_number}")
    problem = await get_problem_by_number(db, problem_number)
    response = ProblemResponse.model_validate(problem)
    if current_user is not None:
        response.is_solved = await exists_accepted_for(db, current_user.id, problem.id)
    return response


@problem_router.post(
    "",
    response_model=ProblemResponse,
    status_code=201,
    summary="Create a problem",
    description="Creates a new problem. Requires an admin account."
)
async def create_problem(
    problem_data: ProblemCreate,
    db: AsyncSession = Depends(get_session),
    admin: UserBaseResponse = Depends(get_admin_user),
):
    problem_logger.info(f"Admin {admin.username} creating problem: {problem_data.title}")
    problem = await create_problem_in_db(db, problem_data)
    return ProblemResponse.model_validate(problem)
