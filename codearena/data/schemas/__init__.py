from .auth import (
    AuthResponse,
    UserBase,
    UserBaseResponse,
    UserCreateModel,
    UserLoginModel,
    UserResponseModel,
)
from .base import BaseModel
from .dashboard import (
    ActivityEntry,
    DashboardResponse,
    LeaderboardEntry,
    LeaderboardResponse,
)
from .enums import Difficulty, Language, UserRole, Verdict
from .judge import (
    CodeExecutionRequest,
    CodeExecutionResponse,
    JudgeHealthResponse,
    JudgeSettings,
)
from .problem import (
    Problem,
    ProblemCreate,
    ProblemListResponse,
    ProblemResponse,
    ProblemSummary,
)
from .submission import (
    SolvedProblem,
    Submission,
    SubmissionCreate,
    SubmissionDetail,
    SubmissionResponse,
    SubmissionResult,
)
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "UserRole",
    "UserBase",
    "UserCreateModel",
    "UserLoginModel",
    "UserBaseResponse",
    "UserResponseModel",
    "AuthResponse",
    "Problem",
    "ProblemCreate",
    "ProblemResponse",
    "ProblemSummary",
    "ProblemListResponse",
    "Difficulty",
    "Language",
    "Verdict",
    "Submission",
    "SolvedProblem",
    "SubmissionCreate",
    "SubmissionResponse",
    "SubmissionDetail",
    "SubmissionResult",
    "JudgeSettings",
    "CodeExecutionRequest",
    "CodeExecutionResponse",
    "JudgeHealthResponse",
    "ActivityEntry",
    "DashboardResponse",
    "LeaderboardEntry",
    "LeaderboardResponse",
]
