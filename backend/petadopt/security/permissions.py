"""Role helper for explicit authorization checks."""

from __future__ import annotations

from collections.abc import Collection

from petadopt.models.account import Account, AccountRole
from petadopt.services.errors import ForbiddenError


def authorize(account: Account, allowed: Collection[AccountRole]) -> None:
    """Raise ForbiddenError if the account's role is not in the allowed set.

    Membership only: roles form no hierarchy.
    """

    if account.role not in allowed:
        raise ForbiddenError(
            f"User role '{account.role.value}' is not authorized to access this route"
        )


def is_administrator(account: Account) -> bool:
    return account.role == AccountRole.ADMINISTRATOR


__all__ = ["authorize", "is_administrator"]
