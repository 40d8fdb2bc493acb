"""Pydantic schemas for adoptable pets."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from petadopt.models.pet import (
    DEFAULT_PET_PHOTO,
    PetGender,
    PetSize,
    PetSpecies,
    PetStatus,
)
from petadopt.schemas.account import AccountSummary
from petadopt.schemas.common import CamelModel


def _lower(value: object) -> object:
    return value.strip().lower() if isinstance(value, str) else value


class PetBase(CamelModel):
    """Shared pet fields."""

    name: str = Field(min_length=1, max_length=120)
    species: PetSpecies
    breed: str = Field(min_length=1, max_length=120)
    age: int = Field(ge=0)
    gender: PetGender
    size: PetSize | None = None
    color: str | None = Field(default=None, max_length=120)
    description: str = Field(min_length=1)
    photo: str = Field(default=DEFAULT_PET_PHOTO, max_length=1024)
    vaccinated: bool = False
    neutered: bool = False

    @field_validator("species", "gender", "size", mode="before")
    @classmethod
    def _normalize_enum(cls, value: object) -> object:
        return _lower(value)

    @field_validator("name", "breed", "description")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field is required")
        return value


class PetCreate(PetBase):
    """Payload for creating a pet."""

    pass


class PetUpdate(CamelModel):
    """Mutable descriptive fields; status changes go through the workflow."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    species: PetSpecies | None = None
    breed: str | None = Field(default=None, min_length=1, max_length=120)
    age: int | None = Field(default=None, ge=0)
    gender: PetGender | None = None
    size: PetSize | None = None
    color: str | None = Field(default=None, max_length=120)
    description: str | None = Field(default=None, min_length=1)
    photo: str | None = Field(default=None, max_length=1024)
    vaccinated: bool | None = None
    neutered: bool | None = None

    @field_validator("species", "gender", "size", mode="before")
    @classmethod
    def _normalize_enum(cls, value: object) -> object:
        return _lower(value)


class PetStatusUpdate(CamelModel):
    """Administrator override of a pet's status."""

    status: PetStatus

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: object) -> object:
        return _lower(value)


class PetSummary(CamelModel):
    """Compact pet representation embedded in applications."""

    id: uuid.UUID
    name: str
    species: PetSpecies
    breed: str
    photo: str
    status: PetStatus


class PetRead(PetBase):
    """Serialized pet representation."""

    id: uuid.UUID
    status: PetStatus
    added_by_id: uuid.UUID | None = None
    added_by: AccountSummary | None = None
    created_at: datetime
    updated_at: datetime


__all__ = [
    "PetCreate",
    "PetRead",
    "PetStatusUpdate",
    "PetSummary",
    "PetUpdate",
]
