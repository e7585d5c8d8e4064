# Set environment variables before the application modules read them
import os

os.environ["TESTING"] = "True"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("JWT_SECRET", "codearena-test-secret-key-0123456789abcdef")
os.environ.setdefault("JUDGE0_API_KEY", "test-judge-key")
os.environ.setdefault("LOG_FILE", "logs/test.log")

from datetime import datetime

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from codearena.business.services import create_access_token, generate_password_hash
from codearena.config import logger
from codearena.data.repositories import (
    Judge0Client,
    get_judge_client,
    get_redis_client,
    get_session,
)
from codearena.data.schemas import Difficulty, JudgeSettings, Problem, User, UserRole
from codearena.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"

ACCEPTED_RESULT = {
    "stdout": "5\n",
    "time": "0.01",
    "memory": 1200,
    "stderr": None,
    "compile_output": None,
    "message": None,
    "status": {"id": 3, "description": "Accepted"},
}


class JudgeStub:
    """Canned Judge0 behaviour served through httpx.MockTransport."""

    def __init__(self):
        self.status_code = 200
        self.payload = dict(ACCEPTED_RESULT)
        self.error = None
        self.requests = []

    def respond_with(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def fail_with(self, error):
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.payload)


class FakeRedis:
    """In-memory stand-in for the token blocklist."""

    def __init__(self):
        self.blocklist = set()

    async def add_jti_to_blocklist(self, jti: str) -> None:
        self.blocklist.add(jti)

    async def token_in_blocklist(self, jti: str) -> bool:
        return jti in self.blocklist

    async def close(self) -> None:
        pass


@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def test_db(engine):
    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def judge_stub():
    return JudgeStub()


@pytest.fixture
def judge_client(judge_stub):
    settings = JudgeSettings(
        base_url="https://judge.test",
        api_key="test-judge-key",
        api_host="judge.test",
        timeout=5,
    )
    return Judge0Client(settings, transport=httpx.MockTransport(judge_stub.handler))


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest_asyncio.fixture
async def client(test_db: AsyncSession, judge_client, fake_redis):
    async def override_get_session():
        yield test_db

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_judge_client] = lambda: judge_client
    app.dependency_overrides[get_redis_client] = lambda: fake_redis

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def make_user(db: AsyncSession, username: str, role: UserRole = UserRole.USER, **stats) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=generate_password_hash("password123"),
        role=role.value,
        **stats,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def build_auth_headers(user: User) -> dict:
    token = create_access_token(
        {"id": str(user.id), "username": user.username, "role": UserRole(user.role).value}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return build_auth_headers


@pytest.fixture
def user_factory(test_db):
    async def factory(username: str, role: UserRole = UserRole.USER, **stats) -> User:
        return await make_user(test_db, username, role, **stats)

    return factory


@pytest_asyncio.fixture
async def test_user(test_db):
    return await make_user(test_db, "testuser")


@pytest_asyncio.fixture
async def other_user(test_db):
    return await make_user(test_db, "otheruser")


@pytest_asyncio.fixture
async def admin_user(test_db):
    return await make_user(test_db, "admin", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def test_problem(test_db):
    problem = Problem(
        problem_number=1,
        title="Sum of Two Numbers",
        description="Read two integers and print their sum.",
        difficulty=Difficulty.EASY.value,
        category="Math",
        tags=["math", "implementation"],
        input_example="2 3",
        expected_output="5",
        created_at=datetime(2024, 1, 1),
    )
    test_db.add(problem)
    await test_db.commit()
    await test_db.refresh(problem)
    return problem


@pytest_asyncio.fixture
async def hard_problem(test_db):
    problem = Problem(
        problem_number=2,
        title="Longest Path in a DAG",
        description="Find the longest path in a directed acyclic graph.",
        difficulty=Difficulty.HARD.value,
        category="Graphs",
        tags=["graphs", "dp"],
        input_example="3 2\n1 2\n2 3",
        expected_output="2",
        created_at=datetime(2024, 1, 2),
    )
    test_db.add(problem)
    await test_db.commit()
    await test_db.refresh(problem)
    return problem


# Disable logging during tests
@pytest.fixture(autouse=True)
def disable_logging():
    logger.disabled = True
    yield
    logger.disabled = False
