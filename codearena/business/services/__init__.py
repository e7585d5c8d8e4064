from .auth import UserService, get_user_service
from .auth_dependency import (
    AccessTokenFromCookie,
    RefreshTokenFromCookie,
    TokenFromCookie,
    get_admin_user,
    get_current_user,
    get_optional_user,
)
from .auth_util import (
    create_access_token,
    create_refresh_token,
    decode_token,
    generate_password_hash,
    verify_password,
)
from .dashboard import get_dashboard_service, get_leaderboard_service
from .language import get_language_id
from .submission import SubmissionService
from .user_stats import UserStatsService
from .verdict import map_judge0_status, map_status_id

__all__ = [
    "UserService",
    "get_user_service",
    "generate_password_hash",
    "verify_password",
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "TokenFromCookie",
    "AccessTokenFromCookie",
    "RefreshTokenFromCookie",
    "get_current_user",
    "get_optional_user",
    "get_admin_user",
    "get_dashboard_service",
    "get_leaderboard_service",
    "get_language_id",
    "SubmissionService",
    "UserStatsService",
    "map_judge0_status",
    "map_status_id",
]
