from .database import get_session, init_db
from .judge0 import Judge0Client, get_judge_client
from .problem import (
    create_problem_in_db,
    get_problem_by_id,
    get_problem_by_number,
    list_problems_from_db,
)
from .redis import RedisClient, get_redis_client, redis_client
from .submission import (
    count_user_submissions_by_verdict,
    create_submission,
    exists_accepted_for,
    get_submission_by_id,
    get_submission_with_problem,
    list_accepted_dates,
    list_user_submissions,
    list_user_submissions_since,
    list_user_submissions_with_problem,
    update_submission_result,
)
from .user_repository import (
    credit_first_solve,
    get_leaderboard,
    get_user_by_id,
    get_user_rank,
    increment_total_submissions,
    mark_problem_solved,
)

__all__ = [
    "get_session",
    "init_db",
    "Judge0Client",
    "get_judge_client",
    "RedisClient",
    "redis_client",
    "get_redis_client",
    "get_problem_by_id",
    "get_problem_by_number",
    "create_problem_in_db",
    "list_problems_from_db",
    "create_submission",
    "update_submission_result",
    "get_submission_by_id",
    "get_submission_with_problem",
    "list_user_submissions",
    "list_user_submissions_with_problem",
    "list_user_submissions_since",
    "exists_accepted_for",
    "count_user_submissions_by_verdict",
    "list_accepted_dates",
    "get_user_by_id",
    "increment_total_submissions",
    "mark_problem_solved",
    "credit_first_solve",
    "get_leaderboard",
    "get_user_rank",
]
