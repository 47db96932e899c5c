"""Async database engine and session management.

Provides async connections via SQLModel and SQLAlchemy's asyncio extension.
The default URL points at a local SQLite file (aiosqlite driver); any async
SQLAlchemy URL works.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from highlightcode.config import get_settings

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncEngine

logger = logging.getLogger(__name__)


@dataclass
class _DatabaseState:
    """Internal state holder for database engine and session factory."""

    engine: AsyncEngine | None = field(default=None)
    session_factory: async_sessionmaker[AsyncSession] | None = field(default=None)


# Module-level state (initialized on first use)
_state = _DatabaseState()


def get_database_url() -> str:
    """Get the store URL from Settings.

    Raises:
        ValueError: If STORE__URL is empty.
    """
    url = get_settings().store.url
    if not url:
        msg = "STORE__URL is not configured. Set it in your .env file."
        raise ValueError(msg)
    return url


async def init_db(url: str | None = None) -> None:
    """Initialize the engine and create missing tables.

    Args:
        url: Override for the configured store URL (tests pass a
            temporary SQLite file).
    """
    # Registers the table on SQLModel.metadata.
    from highlightcode.db import models  # noqa: F401

    _state.engine = create_async_engine(
        url or get_database_url(),
        echo=get_settings().store.echo,
    )
    async with _state.engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    _state.session_factory = async_sessionmaker(
        _state.engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    logger.info("Bookmark store ready: %s", _state.engine.url)


async def close_db() -> None:
    """Dispose of the engine and clear module state."""
    if _state.engine:
        await _state.engine.dispose()
        _state.engine = None
        _state.session_factory = None


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Get an async database session.

    Yields a session that auto-commits on success and rolls back on error.
    Exceptions are logged before re-raising. The engine is created lazily
    on first use.

    Usage:
        async with get_session() as session:
            row = await session.get(StoredValue, key)
    """
    if _state.session_factory is None:
        await init_db()

    session_factory = _state.session_factory
    assert session_factory is not None  # For type narrowing

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            logger.exception("Database session error, rolling back transaction")
            await session.rollback()
            raise
