"""Narrow configuration views handed to individual components."""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel

from petadopt.core.config import Settings, get_settings


class TokenSettings(BaseModel):
    """Secrets and lifetimes used by the token service."""

    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)


class CredentialSettings(BaseModel):
    """Reset credential lifetime."""

    reset_token_ttl: timedelta = timedelta(hours=1)


def get_token_settings(settings: Settings | None = None) -> TokenSettings:
    """Return token-specific configuration."""

    settings = settings or get_settings()
    return TokenSettings(
        access_secret=settings.jwt_secret_key,
        refresh_secret=settings.jwt_refresh_secret_key or settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        access_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        refresh_ttl=timedelta(days=settings.refresh_token_expire_days),
    )


def get_credential_settings(settings: Settings | None = None) -> CredentialSettings:
    """Return credential-store configuration."""

    settings = settings or get_settings()
    return CredentialSettings(
        reset_token_ttl=timedelta(minutes=settings.password_reset_expire_minutes),
    )
