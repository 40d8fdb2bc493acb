"""Security utilities for hashing and JWT handling."""

from __future__ import annotations

import enum
import hashlib
import secrets
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import bcrypt
from jose import JWTError, jwt

from petadopt.core.settings import TokenSettings
from petadopt.services.errors import InvalidTokenError

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its hash using bcrypt."""
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
    except (ValueError, TypeError):  # guard against malformed hashes
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage using bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def generate_reset_token() -> str:
    """Return a random URL-safe one-time token."""
    return secrets.token_urlsafe(32)


def hash_reset_token(raw: str) -> str:
    """Digest a reset token for storage and lookup."""
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class TokenKind(str, enum.Enum):
    """Bearer token classes, each signed with its own secret."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenService:
    """Issue and verify stateless access and refresh tokens.

    Issued tokens are not persisted, so there is no revocation: a refresh
    token stays valid until it expires and is reused rather than rotated.
    """

    def __init__(self, settings: TokenSettings, clock: Clock = _utcnow) -> None:
        self._settings = settings
        self._clock = clock

    def _secret(self, kind: TokenKind) -> str:
        if kind is TokenKind.REFRESH:
            return self._settings.refresh_secret or self._settings.access_secret
        return self._settings.access_secret

    def _issue(self, account_id: uuid.UUID | str, kind: TokenKind) -> str:
        ttl = (
            self._settings.access_ttl
            if kind is TokenKind.ACCESS
            else self._settings.refresh_ttl
        )
        issued_at = self._clock()
        claims: dict[str, Any] = {
            "sub": str(account_id),
            "type": kind.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + ttl).timestamp()),
        }
        return jwt.encode(
            claims, self._secret(kind), algorithm=self._settings.algorithm
        )

    def issue_access_token(self, account_id: uuid.UUID | str) -> str:
        """Create a short-lived access token."""
        return self._issue(account_id, TokenKind.ACCESS)

    def issue_refresh_token(self, account_id: uuid.UUID | str) -> str:
        """Create a long-lived refresh token."""
        return self._issue(account_id, TokenKind.REFRESH)

    def verify(self, token: str, kind: TokenKind) -> uuid.UUID:
        """Return the account id carried by ``token`` or raise InvalidTokenError."""
        try:
            claims = jwt.decode(
                token, self._secret(kind), algorithms=[self._settings.algorithm]
            )
        except JWTError as exc:
            raise InvalidTokenError() from exc

        if claims.get("type") != kind.value:
            raise InvalidTokenError()
        try:
            return uuid.UUID(str(claims.get("sub")))
        except (ValueError, TypeError) as exc:
            raise InvalidTokenError() from exc

    def refresh(self, refresh_token: str) -> str:
        """Exchange a valid refresh token for a new access token."""
        account_id = self.verify(refresh_token, TokenKind.REFRESH)
        return self.issue_access_token(account_id)


__all__ = [
    "TokenKind",
    "TokenService",
    "generate_reset_token",
    "get_password_hash",
    "hash_reset_token",
    "verify_password",
]
