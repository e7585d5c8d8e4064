from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import case, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.config import logger
from codearena.data.schemas import Difficulty, Problem, ProblemCreate
from codearena.errors import BadRequestException, DatabaseException, ResourceNotFoundException

problem_logger = logger.getChild("problem_repository")

SORTABLE_FIELDS = {
    "problem_number": Problem.problem_number,
    "title": Problem.title,
    "difficulty": case(
        {"Easy": 1, "Medium": 2, "Hard": 3}, value=Problem.difficulty, else_=4
    ),
    "created_at": Problem.created_at,
}


async def get_problem_by_id(db: AsyncSession, problem_id: UUID) -> Problem:
    """Fetch a problem by its ID or raise ResourceNotFoundException."""
    problem = await db.get(Problem, problem_id)
    if not problem:
        problem_logger.warning(f"Problem not found: ID {problem_id}")
        raise ResourceNotFoundException(detail="Problem not found")
    return problem


async def get_problem_by_number(db: AsyncSession, problem_number: int) -> Problem:
    result = await db.execute(select(Problem).where(Problem.problem_number == problem_number))
    problem = result.scalars().first()
    if not problem:
        problem_logger.warning(f"Problem not found: number {problem_number}")
        raise ResourceNotFoundException(detail="Problem not found")
    return problem


async def create_problem_in_db(db: AsyncSession, problem: ProblemCreate) -> Problem:
    """Insert a problem, numbering it after the current highest one when no number is given."""
    problem_data = problem.model_dump(mode="json")
    if problem_data.get("problem_number") is None:
        result = await db.execute(select(func.max(Problem.problem_number)))
        problem_data["problem_number"] = (result.scalar_one_or_none() or 0) + 1

    new_problem = Problem(**problem_data)
    try:
        db.add(new_problem)
        await db.commit()
        await db.refresh(new_problem)
    except IntegrityError as e:
        await db.rollback()
        problem_logger.warning(
            f"Problem number already taken: {problem_data['problem_number']}"
        )
        raise BadRequestException(
            detail=f"Problem number {problem_data['problem_number']} already exists",
            error=str(e.orig),
        )
    except Exception as e:
        await db.rollback()
        problem_logger.error(f"Error in create_problem_in_db: {str(e)}", exc_info=True)
        raise DatabaseException(detail="Failed to create problem", error=str(e))

    problem_logger.info(
        f"Created problem #{new_problem.problem_number} with ID: {new_problem.id}"
    )
    return new_problem


async def list_problems_from_db(
    db: AsyncSession,
    skip: int,
    limit: int,
    difficulty: Optional[Difficulty] = None,
    category: Optional[str] = None,
    tags: Optional[List[str]] = None,
    search: Optional[str] = None,
    sort_by: str = "problem_number",
    order: str = "asc",
) -> Tuple[List[Problem], int]:
    """Returns a filtered page of problems and the total number of matches."""
    query = select(Problem)
    if difficulty:
        query = query.where(Problem.difficulty == difficulty.value)
    if category:
        query = query.where(func.lower(Problem.category) == category.lower())
    if search:
        pattern = f"%{search.lower()}%"
        query = query.where(
            or_(
                func.lower(Problem.title).like(pattern),
                func.lower(Problem.description).like(pattern),
            )
        )

    sort_column = SORTABLE_FIELDS.get(sort_by, Problem.problem_number)
    ordering = sort_column.desc() if order.lower() == "desc" else sort_column.asc()
    query = query.order_by(ordering, Problem.problem_number.asc())

    try:
        if tags:
            # Tags live in a JSON column, so they are matched after loading.
            result = await db.execute(query)
            wanted = {tag.lower() for tag in tags}
            matching = [
                p
                for p in result.scalars().all()
                if wanted.issubset({t.lower() for t in (p.tags or [])})
            ]
            total = len(matching)
            problems = matching[skip : skip + limit]
        else:
            count_result = await db.execute(
                select(func.count()).select_from(query.order_by(None).subquery())
            )
            total = count_result.scalar_one()
            result = await db.execute(query.offset(skip).limit(limit))
            problems = list(result.scalars().all())
    except Exception as e:
        problem_logger.error(f"Failed to list problems: {str(e)}")
        raise DatabaseException(detail="Failed to list problems", error=str(e))

    problem_logger.info(
        f"Listed {len(problems)} of {total} problems, skip: {skip}, limit: {limit}"
    )
    return problems, total
