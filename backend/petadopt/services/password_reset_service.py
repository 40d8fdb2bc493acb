"""Password reset services."""
from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.security import (
    Clock,
    generate_reset_token,
    get_password_hash,
    hash_reset_token,
)
from petadopt.core.settings import CredentialSettings
from petadopt.models.account import Account
from petadopt.services import account_service
from petadopt.services.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(UTC)


async def create_reset_token(
    session: AsyncSession,
    *,
    email: str,
    settings: CredentialSettings,
    clock: Clock = _now,
) -> tuple[str, datetime]:
    """Issue a one-time reset token, replacing any earlier one.

    Only the token digest is stored; the raw value is returned to the caller.
    """
    account = await account_service.get_account_by_email(session, email)
    if account is None:
        raise NotFoundError("No user found with that email")

    raw_token = generate_reset_token()
    expires_at = clock() + settings.reset_token_ttl
    account.reset_token_hash = hash_reset_token(raw_token)
    account.reset_token_expires_at = expires_at
    session.add(account)
    await session.commit()
    logger.info("Password reset token issued for account %s", account.id)
    return raw_token, expires_at


async def consume_reset_token(
    session: AsyncSession,
    *,
    token: str,
    new_password: str,
    clock: Clock = _now,
) -> Account:
    """Set a new password using a reset token and clear the credential."""
    result = await session.execute(
        select(Account).where(Account.reset_token_hash == hash_reset_token(token))
    )
    account = result.scalar_one_or_none()
    if account is None or account.reset_token_expires_at is None:
        raise InvalidArgumentError("Invalid or expired password reset token")

    expires_at = account.reset_token_expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    if expires_at <= clock():
        raise InvalidArgumentError("Invalid or expired password reset token")

    account.hashed_password = get_password_hash(new_password)
    account.reset_token_hash = None
    account.reset_token_expires_at = None
    session.add(account)
    await session.commit()
    logger.info("Password reset completed for account %s", account.id)
    return account
