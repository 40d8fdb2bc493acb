"""Role checks."""

from __future__ import annotations

import pytest

from petadopt.models import Account, AccountRole
from petadopt.security.permissions import authorize, is_administrator
from petadopt.services.errors import ForbiddenError


def _account(role: AccountRole) -> Account:
    return Account(
        name="Someone",
        email=f"{role.value}@example.com",
        hashed_password="x",
        role=role,
    )


def test_administrator_passes_admin_check() -> None:
    authorize(_account(AccountRole.ADMINISTRATOR), {AccountRole.ADMINISTRATOR})


def test_member_is_forbidden_from_admin_check() -> None:
    with pytest.raises(ForbiddenError) as exc_info:
        authorize(_account(AccountRole.MEMBER), {AccountRole.ADMINISTRATOR})
    assert exc_info.value.message == (
        "User role 'member' is not authorized to access this route"
    )
    assert exc_info.value.status_code == 403


def test_roles_have_no_hierarchy() -> None:
    with pytest.raises(ForbiddenError):
        authorize(_account(AccountRole.ADMINISTRATOR), {AccountRole.MEMBER})


def test_is_administrator() -> None:
    assert is_administrator(_account(AccountRole.ADMINISTRATOR))
    assert not is_administrator(_account(AccountRole.MEMBER))
