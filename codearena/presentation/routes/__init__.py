from .auth import auth_router
from .dashboard import router as dashboard_router
from .judge import judge_router
from .problem import problem_router
from .submission import submission_router

__all__ = [
    "auth_router",
    "dashboard_router",
    "judge_router",
    "problem_router",
    "submission_router",
]
