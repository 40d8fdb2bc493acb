"""Adoption application model."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.db.base import Base
from petadopt.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from petadopt.models.account import Account
    from petadopt.models.pet import Pet

PET_APPLICANT_CONSTRAINT = "uq_adoption_applications_pet_applicant"


class ApplicationStatus(str, enum.Enum):
    """Application lifecycle; approved and rejected are terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LivingSpace(str, enum.Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    FARM = "farm"


class AdoptionApplication(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A claim by one account on one pet."""

    __tablename__ = "adoption_applications"

    __table_args__ = (
        # One application per (pet, account) for all time, whatever its status.
        UniqueConstraint("pet_id", "applicant_id", name=PET_APPLICANT_CONSTRAINT),
        Index("ix_adoption_applications_pet_status", "pet_id", "status"),
    )

    # Pet deletion is unconditional; the application is kept as an orphan.
    pet_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("pets.id", ondelete="SET NULL")
    )
    applicant_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus), default=ApplicationStatus.PENDING, nullable=False
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    experience: Mapped[str] = mapped_column(Text, nullable=False)
    living_space: Mapped[LivingSpace] = mapped_column(
        Enum(LivingSpace), nullable=False
    )
    has_other_pets: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    admin_notes: Mapped[str | None] = mapped_column(Text)
    reviewed_by_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("accounts.id", ondelete="SET NULL")
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    pet: Mapped["Pet | None"] = relationship("Pet")
    applicant: Mapped["Account"] = relationship(
        "Account", foreign_keys=[applicant_id]
    )
    reviewed_by: Mapped["Account | None"] = relationship(
        "Account", foreign_keys=[reviewed_by_id]
    )
