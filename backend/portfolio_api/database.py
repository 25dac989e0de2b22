"""
Portfolio Backend: Database Engine & Session Management
========================================================

What:  Async SQLAlchemy engine, session factory, and declarative base.
Why:   Centralizes all database connection logic in one place.
How:   Builds an async engine from settings; the submission store opens one
       short-lived session per insert from `async_session_factory`.
Who:   Used by the submission store, the health check, and Alembic.
When:  Engine is created at module import; sessions are created per-call.

Connection Pooling Strategy:
    pool_size / max_overflow: Small; the only writer is the contact form.
    pool_pre_ping:            Validates connections before use (catches stale
                              connections after a database restart).
    pool_recycle=3600:        Recycles connections every hour.

    SQLite (used by the test suite) has its own pooling and rejects the
    sizing arguments, so they are applied to server databases only.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from portfolio_api.config import settings


def build_engine(database_url: str) -> AsyncEngine:
    """
    Create an async engine with pool settings suited to the backend.

    Args:
        database_url: SQLAlchemy URL with an async driver
                      (postgresql+asyncpg, sqlite+aiosqlite, ...).
    """
    url = make_url(database_url)
    options = {"echo": settings.log_level == "DEBUG"}

    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )

    return create_async_engine(url, **options)


engine = build_engine(settings.database_url)

# expire_on_commit=False: the store returns the Submission after commit, and
# callers read its attributes outside the session
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object, which Alembic reads for --autogenerate.
    """
    pass


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
