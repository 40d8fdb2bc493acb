"""Account schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import EmailStr, Field, TypeAdapter, field_validator

from petadopt.models.account import AccountRole
from petadopt.schemas.common import CamelModel

_EMAIL_ADAPTER = TypeAdapter(EmailStr)


def validate_relaxed_email(value: str) -> str:
    """Allow placeholder ``*.local`` domains while keeping core validation."""

    email = value.strip()
    try:
        return _EMAIL_ADAPTER.validate_python(email)
    except Exception:
        local_part, _, domain = email.partition("@")
        if local_part and domain and domain.endswith(".local"):
            return email
        raise ValueError("Please provide a valid email") from None


class AccountSummary(CamelModel):
    """Lightweight account representation embedded in other resources."""

    id: uuid.UUID
    name: str
    email: str


class AccountRead(AccountSummary):
    """Serialized account profile."""

    role: AccountRole
    phone: str | None = None
    address: str | None = None
    created_at: datetime
    updated_at: datetime


class AccountProfileUpdate(CamelModel):
    """Fields an account may change on its own profile."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    phone: str | None = Field(default=None, max_length=32)
    address: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


__all__ = [
    "AccountProfileUpdate",
    "AccountRead",
    "AccountSummary",
    "validate_relaxed_email",
]
