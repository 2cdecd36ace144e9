"""Engine lifecycle and request scoped sessions."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from devices_api.core.config import DatabaseSettings, get_settings
from devices_api.infrastructure.database.base import Base

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def engine_options(database: DatabaseSettings) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` derived from the settings."""
    options: dict[str, Any] = {"echo": database.echo}
    if _is_memory_sqlite(database.url):
        # One shared connection, otherwise every session sees an empty database.
        options.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
        return options
    options.update(
        {
            key: value
            for key, value in (("pool_size", database.pool_size), ("max_overflow", database.max_overflow))
            if value is not None
        }
    )
    return options


def get_engine() -> AsyncEngine:
    global _engine, _session_factory
    if _engine is None:
        database = get_settings().database
        _engine = create_async_engine(database.url, **engine_options(database))
        _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
        logger.info("Database engine created for %s", _engine.url.render_as_string(hide_password=True))
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _session_factory
    if _engine is None:
        return
    await _engine.dispose()
    _engine, _session_factory = None, None
    logger.info("Database engine disposed")


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session wrapped in one transaction.

    The transaction commits when the caller finishes normally and rolls back
    when an exception propagates through the ``yield``.
    """
    get_engine()
    async with _session_factory() as session, session.begin():
        yield session


async def init_db() -> None:
    """Create missing tables. Alembic owns the schema outside local runs."""
    from devices_api.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
