"""Account data access helpers (the credential store)."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petadopt.core.security import get_password_hash, verify_password
from petadopt.models.account import Account, AccountRole
from petadopt.schemas.account import AccountProfileUpdate
from petadopt.services.errors import ConflictError, InvalidArgumentError

logger = logging.getLogger(__name__)

_EMAIL_TAKEN = "User already exists with this email"


async def get_account_by_email(session: AsyncSession, email: str) -> Account | None:
    """Return an account by (case-insensitive) email address."""
    result = await session.execute(
        select(Account).where(Account.email == email.strip().lower())
    )
    return result.scalar_one_or_none()


async def get_account(session: AsyncSession, account_id: uuid.UUID) -> Account | None:
    """Return an account by ID."""
    return await session.get(Account, account_id)


async def create_account(
    session: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
    phone: str | None = None,
    address: str | None = None,
    role: AccountRole = AccountRole.MEMBER,
) -> Account:
    """Persist a new account with a hashed password."""
    email = email.strip().lower()
    if await get_account_by_email(session, email) is not None:
        raise ConflictError(_EMAIL_TAKEN)

    account = Account(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
        phone=phone,
        address=address,
        role=role,
    )
    session.add(account)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError(_EMAIL_TAKEN) from exc
    await session.refresh(account)
    logger.info("Registered account %s with role %s", account.id, role.value)
    return account


async def authenticate_credentials(
    session: AsyncSession, *, email: str, password: str
) -> Account | None:
    """Validate credentials and return the account if they match."""
    account = await get_account_by_email(session, email)
    if account is None:
        return None
    if not verify_password(password, account.hashed_password):
        return None
    return account


async def update_profile(
    session: AsyncSession, account: Account, payload: AccountProfileUpdate
) -> Account:
    """Update the owner's own profile fields."""
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(account, field, value)
    session.add(account)
    await session.commit()
    await session.refresh(account)
    return account


async def change_password(
    session: AsyncSession,
    account: Account,
    *,
    current_password: str,
    new_password: str,
) -> Account:
    """Replace the password after checking the current one."""
    if not verify_password(current_password, account.hashed_password):
        raise InvalidArgumentError("Current password is incorrect")
    account.hashed_password = get_password_hash(new_password)
    session.add(account)
    await session.commit()
    logger.info("Password changed for account %s", account.id)
    return account


async def promote_to_administrator(session: AsyncSession, account: Account) -> Account:
    """Elevate an account; only reachable from operator tooling."""
    account.role = AccountRole.ADMINISTRATOR
    session.add(account)
    await session.commit()
    await session.refresh(account)
    logger.info("Account %s promoted to administrator", account.id)
    return account
