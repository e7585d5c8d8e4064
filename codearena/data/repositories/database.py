from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from codearena.config import Config

async_engine = create_async_engine(url=Config.DB_URL)
async_session = async_sessionmaker(bind=async_engine, expire_on_commit=False)


async def init_db() -> None:
    """
    Creates all tables registered on the SQLModel metadata.
    """
    # Register table models before create_all
    import codearena.data.schemas  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency to get an async session for the application database.
    """
    async with async_session() as session:
        yield session
