"""
Database connection and session management
Uses SQLAlchemy async engine (asyncpg for PostgreSQL, aiosqlite for SQLite)
Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html
"""
from typing import Any, AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from app.core.config import settings


# Validate DATABASE_URL is set
if not settings.DATABASE_URL:
    raise ValueError(
        "DATABASE_URL environment variable is not set. "
        "Please set it in your .env file or environment."
    )


def _engine_options() -> dict[str, Any]:
    """
    Driver-specific engine options

    PostgreSQL gets NullPool and asyncpg connect_args; SQLite keeps the
    default pool and only needs check_same_thread disabled.
    Reference: https://docs.sqlalchemy.org/en/20/core/pooling.html#switching-pool-implementations
    """
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {
        "poolclass": NullPool,
        # asyncpg-specific connection arguments
        # Reference: https://magicstack.github.io/asyncpg/current/api/index.html#connection
        "connect_args": {
            "command_timeout": 60,
            "server_settings": {
                "application_name": "todo_tracker_api",
            },
        },
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    **_engine_options(),
)


# Create async session factory
# Reference: https://docs.sqlalchemy.org/en/20/orm/extensions/asyncio.html#session-basics
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Keep objects accessible after commit
    autocommit=False,
    autoflush=False,
)


# Base class for all database models
# Reference: https://docs.sqlalchemy.org/en/20/orm/declarative_styles.html
class Base(DeclarativeBase):
    """Base class for SQLAlchemy declarative models"""
    pass


# Dependency to get database session
# Used in FastAPI route handlers via dependency injection
# Reference: https://fastapi.tiangolo.com/tutorial/dependencies/
async def get_db() -> AsyncIterator[AsyncSession]:
    """
    Dependency function that provides a database session

    - Commits on success
    - Rolls back on error
    - Always closes the session
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            # Re-raise the original exception so FastAPI can handle it properly
            raise
