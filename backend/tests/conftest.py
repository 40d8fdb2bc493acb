"""Test fixtures for the pet adoption backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_REFRESH_SECRET_KEY", "test-refresh-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from petadopt.core.config import get_settings
from petadopt.core.security import get_password_hash
from petadopt.db.base import Base
from petadopt.db.session import dispose_engine, get_sessionmaker
from petadopt.main import app
from petadopt.models import Account, AccountRole


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(
    reset_database: None, db_url: str
) -> AsyncIterator[dict[str, Any]]:
    """Yield an async client plus one administrator and two members."""
    sessionmaker = get_sessionmaker(db_url)
    admin_password = "AdminPass1"
    member_password = "MemberPass1"

    async with sessionmaker() as session:
        admin = Account(
            name="Avery Admin",
            email="admin@example.com",
            hashed_password=get_password_hash(admin_password),
            role=AccountRole.ADMINISTRATOR,
        )
        member = Account(
            name="Morgan Member",
            email="member@example.com",
            hashed_password=get_password_hash(member_password),
            role=AccountRole.MEMBER,
        )
        other_member = Account(
            name="Noor Neighbour",
            email="neighbour@example.com",
            hashed_password=get_password_hash(member_password),
            role=AccountRole.MEMBER,
        )
        session.add_all([admin, member, other_member])
        await session.commit()

        context: dict[str, Any] = {
            "admin_id": admin.id,
            "admin_email": admin.email,
            "admin_password": admin_password,
            "member_id": member.id,
            "member_email": member.email,
            "other_member_id": other_member.id,
            "other_member_email": other_member.email,
            "member_password": member_password,
        }

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context


@pytest_asyncio.fixture()
async def db_session(reset_database: None, db_url: str) -> AsyncIterator[Any]:
    """Yield a bare session for service-level tests."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        yield session
