"""Account model for members and administrators."""
from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from petadopt.db.base import Base
from petadopt.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class AccountRole(str, enum.Enum):
    """Closed set of roles; there is no hierarchy between them."""

    MEMBER = "member"
    ADMINISTRATOR = "administrator"


class Account(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Identity used for authentication and authorization."""

    __tablename__ = "accounts"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32))
    address: Mapped[str | None] = mapped_column(String(255))
    # Changed only out of band (bootstrap or the promote_admin script).
    role: Mapped[AccountRole] = mapped_column(
        Enum(AccountRole), default=AccountRole.MEMBER, nullable=False
    )
    reset_token_hash: Mapped[str | None] = mapped_column(String(64), unique=True)
    reset_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True)
    )
