"""
Database utilities: async SQLAlchemy engine and session factory.
"""

from __future__ import annotations

import os
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from .storage.models import Base


_engine: Optional[AsyncEngine] = None
_session_maker: Optional[async_sessionmaker[AsyncSession]] = None


def default_db_url() -> str:
    """Default database URL when DATABASE_URL is not set.

    - Tests: in-memory SQLite unless TEST_DB_URL overrides (fast, hermetic).
    - Otherwise: a SQLite file in the process working directory.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return os.getenv("TEST_DB_URL", "sqlite+aiosqlite:///:memory:")
    return os.getenv("LEDGER_DB_URL", "sqlite+aiosqlite:///./healthledger.db")


def create_engine_for_url(url: str) -> AsyncEngine:
    """Create an engine; in-memory SQLite shares one connection across sessions."""
    if url.strip().lower().startswith("sqlite") and ":memory:" in url:
        return create_async_engine(
            url,
            future=True,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, future=True, echo=False)


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        url = os.getenv("DATABASE_URL", default_db_url())
        _engine = create_engine_for_url(url)
    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory bound to ``get_engine()``.

    ``async with get_session_maker()() as session:``
    """
    global _session_maker
    if _session_maker is None:
        _session_maker = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_maker


async def init_models(engine: Optional[AsyncEngine] = None) -> None:
    """Create ledger tables if they do not exist yet."""
    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
