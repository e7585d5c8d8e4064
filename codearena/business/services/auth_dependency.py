from typing import Optional

from fastapi import Depends, Request

from codearena.business.services.auth_util import decode_token
from codearena.data.repositories import RedisClient, get_redis_client
from codearena.data.schemas import UserBaseResponse, UserRole
from codearena.errors import AuthenticationException, AuthorizationException


def _token_from_request(request: Request, cookie_name: str) -> Optional[str]:
    token = request.cookies.get(cookie_name)
    if token:
        return token
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


class TokenFromCookie:
    """
    Reads a JWT from a cookie, falling back to an ``Authorization: Bearer``
    header, and rejects tokens that are expired, of the wrong kind or revoked.
    """

    def __init__(self, cookie_name: str = "access_token", refresh: bool = False, auto_error: bool = True):
        self.cookie_name = cookie_name
        self.refresh = refresh
        self.auto_error = auto_error

    async def __call__(
        self,
        request: Request,
        redis_client: RedisClient = Depends(get_redis_client),
    ) -> Optional[dict]:
        token = _token_from_request(request, self.cookie_name)
        if not token:
            if not self.auto_error:
                return None
            raise AuthenticationException(detail=f"{self.cookie_name} not provided")

        token_data = decode_token(token)
        if not token_data or token_data.get("is_refresh", False) != self.refresh:
            if not self.auto_error:
                return None
            raise AuthorizationException(detail="Invalid or expired token")

        if await redis_client.token_in_blocklist(token_data["jti"]):
            if not self.auto_error:
                return None
            raise AuthorizationException(detail="Token has been revoked")

        return token_data


AccessTokenFromCookie = TokenFromCookie


class RefreshTokenFromCookie(TokenFromCookie):
    def __init__(self):
        super().__init__(cookie_name="refresh_token", refresh=True)


def _user_from_token(token_data: dict) -> UserBaseResponse:
    try:
        return UserBaseResponse(**token_data["user"])
    except Exception:
        raise AuthenticationException(detail="Could not validate user")


def get_current_user(token_data: dict = Depends(AccessTokenFromCookie())) -> UserBaseResponse:
    return _user_from_token(token_data)


def get_optional_user(
    token_data: Optional[dict] = Depends(AccessTokenFromCookie(auto_error=False)),
) -> Optional[UserBaseResponse]:
    if token_data is None:
        return None
    return _user_from_token(token_data)


def get_admin_user(current_user: UserBaseResponse = Depends(get_current_user)) -> UserBaseResponse:
    if current_user.role != UserRole.ADMIN:
        raise AuthorizationException(detail="Admin privileges required")
    return current_user
