"""Engines and sessions, one pair per database URL."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from petadopt.core.config import get_settings


@dataclass(frozen=True)
class _Binding:
    engine: AsyncEngine
    sessionmaker: async_sessionmaker[AsyncSession]


_bindings: dict[str, _Binding] = {}


def _engine_options(url: str, timeout: float) -> dict[str, object]:
    # SQLite has no pool timeout; its busy timeout plays the same role.
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"timeout": timeout}}
    return {"pool_timeout": timeout, "pool_pre_ping": True}


def _binding(database_url: str | None) -> _Binding:
    settings = get_settings()
    url = database_url or settings.database_url
    binding = _bindings.get(url)
    if binding is None:
        engine = create_async_engine(
            url, **_engine_options(url, settings.database_pool_timeout)
        )
        binding = _Binding(
            engine=engine,
            sessionmaker=async_sessionmaker(engine, expire_on_commit=False),
        )
        _bindings[url] = binding
    return binding


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return the cached sessionmaker for ``database_url`` (default: settings)."""
    return _binding(database_url).sessionmaker


@asynccontextmanager
async def session_scope(database_url: str | None = None) -> AsyncIterator[AsyncSession]:
    """Open a session outside of a request (startup hooks, scripts)."""
    async with get_sessionmaker(database_url)() as session:
        yield session


async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a request-scoped session."""
    async with session_scope() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Close pooled connections and forget the engine for ``database_url``."""
    url = database_url or get_settings().database_url
    binding = _bindings.pop(url, None)
    if binding is not None:
        await binding.engine.dispose()
