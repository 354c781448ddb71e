"""Engine and session lifecycle for the content database."""

from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import DatabaseSettings, get_settings
from app.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def engine_options(database: DatabaseSettings, debug: bool = False) -> dict[str, Any]:
    url = make_url(database.url)
    options: dict[str, Any] = {"echo": database.echo or debug}
    if url.get_backend_name() == "sqlite":
        # Seeding and request handling share one file; wait for locks instead of failing.
        options["connect_args"] = {"timeout": 30}
        if url.database and url.database != ":memory:":
            Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
        return options
    if database.pool_size is not None:
        options["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        options["max_overflow"] = database.max_overflow
    return options


def get_engine() -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(settings.database_url, **engine_options(settings.database, settings.debug))
        _session_factory = async_sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    get_engine()
    assert _session_factory is not None  # for mypy
    return _session_factory


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Session committed on success and rolled back when the block raises."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with session_scope() as session:
        yield session


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create missing tables; deployed databases are upgraded with Alembic instead."""
    from app.db import models  # noqa: F401

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
