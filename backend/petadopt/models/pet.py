"""Adoptable pet model."""

from __future__ import annotations

import enum
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from petadopt.db.base import Base
from petadopt.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from petadopt.models.account import Account

DEFAULT_PET_PHOTO = "https://via.placeholder.com/400x300?text=Pet+Photo"


class PetSpecies(str, enum.Enum):
    """Supported species."""

    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    RABBIT = "rabbit"
    OTHER = "other"


class PetGender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class PetSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class PetStatus(str, enum.Enum):
    """Adoption status, driven by the application workflow."""

    AVAILABLE = "available"
    PENDING = "pending"
    ADOPTED = "adopted"


class Pet(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Represents a pet listed for adoption."""

    __tablename__ = "pets"

    __table_args__ = (
        Index("ix_pets_species_status", "species", "status"),
        Index("ix_pets_created_at", "created_at"),
    )

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    species: Mapped[PetSpecies] = mapped_column(Enum(PetSpecies), nullable=False)
    breed: Mapped[str] = mapped_column(String(120), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[PetGender] = mapped_column(Enum(PetGender), nullable=False)
    size: Mapped[PetSize | None] = mapped_column(Enum(PetSize))
    color: Mapped[str | None] = mapped_column(String(120))
    description: Mapped[str] = mapped_column(Text, nullable=False)
    photo: Mapped[str] = mapped_column(
        String(1024), default=DEFAULT_PET_PHOTO, nullable=False
    )
    status: Mapped[PetStatus] = mapped_column(
        Enum(PetStatus), default=PetStatus.AVAILABLE, nullable=False
    )
    vaccinated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    neutered: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Informational only: any administrator may manage any pet.
    added_by_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("accounts.id", ondelete="SET NULL")
    )

    added_by: Mapped["Account | None"] = relationship("Account")
