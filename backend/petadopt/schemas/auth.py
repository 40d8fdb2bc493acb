"""Authentication schemas."""
from __future__ import annotations

from pydantic import Field, field_validator

from petadopt.schemas.account import AccountSummary, validate_relaxed_email
from petadopt.schemas.common import CamelModel
from petadopt.models.account import AccountRole

# bcrypt only considers the first 72 bytes of a password.
_PASSWORD_MAX = 72


class RegistrationRequest(CamelModel):
    """Self-service registration payload."""

    name: str = Field(max_length=120)
    email: str
    password: str = Field(min_length=6, max_length=_PASSWORD_MAX)
    phone: str | None = Field(default=None, max_length=32)
    address: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return validate_relaxed_email(value)

    @field_validator("phone", "address")
    @classmethod
    def _strip_optional(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class LoginRequest(CamelModel):
    """Login payload."""

    email: str
    password: str = Field(min_length=1, max_length=_PASSWORD_MAX)

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return validate_relaxed_email(value)


class AuthSession(AccountSummary):
    """Account summary plus a fresh token pair."""

    role: AccountRole
    access_token: str
    refresh_token: str


class RefreshTokenRequest(CamelModel):
    refresh_token: str | None = None


class RefreshTokenResponse(CamelModel):
    access_token: str
    refresh_token: str


class ForgotPasswordRequest(CamelModel):
    email: str

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return validate_relaxed_email(value)


class ResetTokenResponse(CamelModel):
    """Reset token handed straight back to the caller (no email delivery)."""

    reset_token: str


class ResetPasswordRequest(CamelModel):
    password: str = Field(min_length=6, max_length=_PASSWORD_MAX)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1, max_length=_PASSWORD_MAX)
    new_password: str = Field(min_length=6, max_length=_PASSWORD_MAX)


__all__ = [
    "AuthSession",
    "ChangePasswordRequest",
    "ForgotPasswordRequest",
    "LoginRequest",
    "RefreshTokenRequest",
    "RefreshTokenResponse",
    "RegistrationRequest",
    "ResetPasswordRequest",
    "ResetTokenResponse",
]
