"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.config import get_settings
from petadopt.core.security import TokenService
from petadopt.core.settings import (
    CredentialSettings,
    get_credential_settings,
    get_token_settings,
)
from petadopt.db.session import get_session
from petadopt.models.account import Account, AccountRole
from petadopt.security.permissions import authorize
from petadopt.services import auth_service

# auto_error is off so a missing header surfaces as our own 401 envelope.
bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


def get_token_service() -> TokenService:
    """Return a token service bound to the current settings."""
    return TokenService(get_token_settings())


def get_credentials_config() -> CredentialSettings:
    return get_credential_settings()


async def get_current_account(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> Account:
    """Authenticate the request via its bearer token."""
    token = credentials.credentials if credentials is not None else None
    return await auth_service.authenticate_bearer(session, tokens, token)


def require_roles(*roles: AccountRole) -> Callable[..., Awaitable[Account]]:
    """Build a dependency that admits only accounts holding one of ``roles``."""

    async def _dependency(
        account: Annotated[Account, Depends(get_current_account)],
    ) -> Account:
        authorize(account, roles)
        return account

    return _dependency


def _parse_rate(value: str, *, fallback: tuple[int, int]) -> tuple[int, int]:
    try:
        count_str, window_str = value.split("/", 1)
        count = int(count_str.strip())
    except ValueError:
        return fallback
    seconds_map = {
        "second": 1,
        "minute": 60,
        "hour": 3600,
        "day": 86400,
    }
    window = window_str.strip().lower().rstrip("s")
    return count, seconds_map.get(window, fallback[1])


def rate_limit(value: str, *, fallback: tuple[int, int] = (100, 60)):
    """Rate limit dependency; a no-op when the limiter was never initialised."""
    times, seconds = _parse_rate(value, fallback=fallback)

    async def _dependency(request: Request, response: Response) -> None:
        if FastAPILimiter.redis is None:
            return None
        limiter = RateLimiter(times=times, seconds=seconds)
        await limiter(request, response)

    return Depends(_dependency)


CurrentAccount = Annotated[Account, Depends(get_current_account)]
AdminAccount = Annotated[Account, Depends(require_roles(AccountRole.ADMINISTRATOR))]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
Tokens = Annotated[TokenService, Depends(get_token_service)]

_settings = get_settings()
DEFAULT_RATE = rate_limit(_settings.rate_limit_default)
LOGIN_RATE = rate_limit(_settings.rate_limit_login, fallback=(10, 60))
