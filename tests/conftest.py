# tests/conftest.py

import os

# Settings are read at import time; tests never touch a real database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.client import TodoClient
from app.core.database import Base, get_db
from app.main import app
from app.services.todo import TodoService

from .fakes import InMemoryTodoRepository, SteppingClock


@pytest.fixture()
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture()
def repository() -> InMemoryTodoRepository:
    return InMemoryTodoRepository()


@pytest.fixture()
def service(repository: InMemoryTodoRepository, clock: SteppingClock) -> TodoService:
    """TodoService wired to the in-memory repository and a stepping clock."""
    return TodoService(repository, now=clock)


@pytest_asyncio.fixture(name="engine")
async def engine_fixture():
    """Fresh in-memory SQLite database for each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture(name="session_maker")
def session_maker_fixture(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(name="db_override")
def db_override_fixture(session_maker):
    """Point the app's get_db dependency at the test database."""
    async def get_db_override():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = get_db_override
    yield
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(name="client")
async def client_fixture(db_override):
    """HTTP client talking to the app in-process."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


@pytest_asyncio.fixture(name="todo_client")
async def todo_client_fixture(db_override):
    """TodoClient talking to the app in-process."""
    async with TodoClient("http://test", transport=ASGITransport(app=app)) as client:
        yield client
