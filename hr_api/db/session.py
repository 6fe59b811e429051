"""
Async SQLAlchemy engine & session factory.

PostgreSQL (asyncpg) in production; SQLite (aiosqlite) for local runs and
the test suite.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import (AsyncEngine, AsyncSession, async_sessionmaker,
                                    create_async_engine)
from sqlalchemy.pool import StaticPool

from hr_api.core.config import settings


def make_engine(url: str) -> AsyncEngine:
    """Build an async engine with pool settings suited to the backend."""
    engine_args: dict[str, Any] = {"echo": False}

    if url.startswith("postgresql"):
        engine_args.update(
            pool_pre_ping=True,
            pool_size=20,
            max_overflow=10,
            pool_recycle=300,
        )
    elif url.startswith("sqlite"):
        engine_args["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            # one shared connection, otherwise every checkout sees an empty DB
            engine_args["poolclass"] = StaticPool

    return create_async_engine(url, **engine_args)


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = make_engine(settings.DATABASE_URL)
async_session_factory = make_session_factory(engine)
