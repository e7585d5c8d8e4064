from typing import Optional
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from codearena.business.services.auth_util import generate_password_hash
from codearena.config import logger
from codearena.data.schemas import User, UserCreateModel, UserRole

account_logger = logger.getChild("accounts")


class UserService:
    """Account lookups and writes used by the auth routes."""

    @staticmethod
    async def get_user_by_id(user_id: UUID, session: AsyncSession) -> Optional[User]:
        return await session.get(User, user_id)

    @staticmethod
    async def get_user_by_email(email: str, session: AsyncSession) -> Optional[User]:
        result = await session.execute(select(User).where(User.email == email.lower()))
        return result.scalars().first()

    @staticmethod
    async def user_exists(username: str, email: str, session: AsyncSession) -> bool:
        """True when either the username or the (case-folded) email is taken."""
        taken = await session.execute(
            select(User.id)
            .where(or_(User.username == username, User.email == email.lower()))
            .limit(1)
        )
        return taken.first() is not None

    @staticmethod
    async def create_user(user_data: UserCreateModel, session: AsyncSession) -> User:
        user = User(
            username=user_data.username,
            email=user_data.email.lower(),
            password_hash=generate_password_hash(user_data.password),
            role=UserRole.USER.value,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        account_logger.info(f"Account created: {user.username} (ID: {user.id})")
        return user

    @staticmethod
    async def update_refresh_token(
        user_id: UUID, refresh_token: Optional[str], session: AsyncSession
    ) -> None:
        """Store the current refresh token, or clear it on logout."""
        await session.execute(
            update(User)
            .where(User.id == user_id)
            .values(refresh_token=refresh_token)
        )
        await session.commit()


def get_user_service() -> UserService:
    return UserService()
