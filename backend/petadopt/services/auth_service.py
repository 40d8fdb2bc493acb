"""Authentication service helpers."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.security import TokenKind, TokenService
from petadopt.models.account import Account
from petadopt.schemas.auth import AuthSession
from petadopt.services import account_service
from petadopt.services.errors import (
    InvalidTokenError,
    UnauthenticatedError,
)


def issue_session(tokens: TokenService, account: Account) -> AuthSession:
    """Return the account summary together with a new token pair."""
    return AuthSession(
        id=account.id,
        name=account.name,
        email=account.email,
        role=account.role,
        access_token=tokens.issue_access_token(account.id),
        refresh_token=tokens.issue_refresh_token(account.id),
    )


async def login(
    session: AsyncSession, tokens: TokenService, *, email: str, password: str
) -> AuthSession:
    """Validate credentials and issue a token pair."""
    account = await account_service.authenticate_credentials(
        session, email=email, password=password
    )
    if account is None:
        raise UnauthenticatedError("Invalid credentials")
    return issue_session(tokens, account)


async def authenticate_bearer(
    session: AsyncSession, tokens: TokenService, token: str | None
) -> Account:
    """Resolve a bearer token to the account it was issued for."""
    if not token:
        raise UnauthenticatedError()
    try:
        account_id = tokens.verify(token, TokenKind.ACCESS)
    except InvalidTokenError as exc:
        raise UnauthenticatedError() from exc

    account = await account_service.get_account(session, account_id)
    if account is None:
        raise UnauthenticatedError("User not found")
    return account


async def refresh_access_token(
    session: AsyncSession, tokens: TokenService, refresh_token: str
) -> str:
    """Issue a new access token; the refresh token itself is reused."""
    try:
        account_id = tokens.verify(refresh_token, TokenKind.REFRESH)
    except InvalidTokenError as exc:
        raise InvalidTokenError("Invalid or expired refresh token") from exc

    if await account_service.get_account(session, account_id) is None:
        raise UnauthenticatedError("User not found")
    return tokens.refresh(refresh_token)
