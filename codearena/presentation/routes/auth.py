from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.business.services import (
    AccessTokenFromCookie,
    RefreshTokenFromCookie,
    UserService,
    create_access_token,
    create_refresh_token,
    get_user_service,
    verify_password,
)
from codearena.config import Config, logger
from codearena.data.repositories import RedisClient, get_redis_client, get_session
from codearena.data.schemas import (
    AuthResponse,
    User,
    UserCreateModel,
    UserLoginModel,
    UserResponseModel,
    UserRole,
)
from codearena.errors import AuthenticationException, BadRequestException

auth_logger = logger.getChild("auth")
auth_router = APIRouter(prefix="/auth", tags=["auth"])

COOKIE_OPTIONS = {"httponly": True, "secure": True, "samesite": "none"}


def token_claims(user: User) -> dict:
    return {"id": str(user.id), "username": user.username, "role": UserRole(user.role).value}


async def start_session(
    response: Response, user: User, user_service: UserService, session: AsyncSession
) -> str:
    """Issue a token pair, remember the refresh token and set both cookies."""
    claims = token_claims(user)
    access_token = create_access_token(claims)
    refresh_token = create_refresh_token(claims)
    await user_service.update_refresh_token(user.id, refresh_token, session)

    response.set_cookie(
        "access_token", access_token, max_age=Config.JWT_ACCESS_TOKEN_EXPIRY, **COOKIE_OPTIONS
    )
    response.set_cookie(
        "refresh_token", refresh_token, max_age=Config.JWT_REFRESH_TOKEN_EXPIRY, **COOKIE_OPTIONS
    )
    return access_token


@auth_router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Creates an account and signs the new user in.",
)
async def register(
    user_data: UserCreateModel,
    response: Response,
    user_service: UserService = Depends(get_user_service),
    session: AsyncSession = Depends(get_session),
):
    if await user_service.user_exists(user_data.username, user_data.email, session):
        auth_logger.warning(f"Registration rejected, account exists: {user_data.username}")
        raise BadRequestException(detail="User with this username or email already exists")

    user = await user_service.create_user(user_data, session)
    token = await start_session(response, user, user_service, session)
    return AuthResponse(token=token, user=UserResponseModel.model_validate(user))


@auth_router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log in",
    description="Checks email and password and sets fresh token cookies.",
)
async def login(
    login_data: UserLoginModel,
    response: Response,
    user_service: UserService = Depends(get_user_service),
    session: AsyncSession = Depends(get_session),
):
    user = await user_service.get_user_by_email(login_data.email, session)
    if user is None or not verify_password(login_data.password, user.password_hash):
        auth_logger.warning(f"Failed login for {login_data.email}")
        raise AuthenticationException(detail="Invalid credentials")

    token = await start_session(response, user, user_service, session)
    auth_logger.info(f"User logged in: {user.username}")
    return AuthResponse(token=token, user=UserResponseModel.model_validate(user))


@auth_router.get(
    "/refresh",
    summary="Rotate tokens",
    description="Exchanges a refresh token for a new token pair; the old refresh token is revoked.",
)
async def refresh(
    response: Response,
    token_details: dict = Depends(RefreshTokenFromCookie()),
    user_service: UserService = Depends(get_user_service),
    redis_client: RedisClient = Depends(get_redis_client),
    session: AsyncSession = Depends(get_session),
):
    user = await user_service.get_user_by_id(UUID(token_details["user"]["id"]), session)
    if user is None:
        raise AuthenticationException(detail="Invalid credentials")

    await redis_client.add_jti_to_blocklist(token_details["jti"])
    token = await start_session(response, user, user_service, session)
    auth_logger.info(f"Tokens rotated for {user.username}")
    return {"message": "Tokens refreshed", "token": token}


@auth_router.get("/me", response_model=UserResponseModel, summary="Current user with statistics")
async def me(
    token_details: dict = Depends(AccessTokenFromCookie()),
    user_service: UserService = Depends(get_user_service),
    session: AsyncSession = Depends(get_session),
):
    user = await user_service.get_user_by_id(UUID(token_details["user"]["id"]), session)
    if user is None:
        raise AuthenticationException(detail="User not found")
    return user


@auth_router.get("/logout", response_model=None, summary="Log out")
async def logout(
    token_details: dict = Depends(AccessTokenFromCookie()),
    user_service: UserService = Depends(get_user_service),
    redis_client: RedisClient = Depends(get_redis_client),
    session: AsyncSession = Depends(get_session),
):
    """Revoke the presented access token, forget the refresh token and clear cookies."""
    user_id = UUID(token_details["user"]["id"])
    await redis_client.add_jti_to_blocklist(token_details["jti"])
    await user_service.update_refresh_token(user_id, None, session)

    response = JSONResponse(content={"message": "Logged out successfully"})
    response.delete_cookie("access_token", **COOKIE_OPTIONS)
    response.delete_cookie("refresh_token", **COOKIE_OPTIONS)
    auth_logger.info(f"User logged out: ID {user_id}")
    return response
