"""Pydantic schemas for adoption applications."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from petadopt.models.application import ApplicationStatus, LivingSpace
from petadopt.schemas.account import AccountSummary
from petadopt.schemas.common import CamelModel
from petadopt.schemas.pet import PetSummary

REVIEW_DECISIONS = (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED)


class ApplicationCreate(CamelModel):
    """Payload submitted by an applicant."""

    pet_id: uuid.UUID
    reason: str = Field(min_length=1)
    experience: str = Field(min_length=1)
    living_space: LivingSpace
    has_other_pets: bool

    @field_validator("reason", "experience")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Field is required")
        return value

    @field_validator("living_space", mode="before")
    @classmethod
    def _normalize_living_space(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


class ApplicationReview(CamelModel):
    """Administrator decision on a pending application."""

    status: ApplicationStatus
    admin_notes: str | None = None

    @field_validator("status")
    @classmethod
    def _decision_only(cls, value: ApplicationStatus) -> ApplicationStatus:
        if value not in REVIEW_DECISIONS:
            raise ValueError("Status must be either approved or rejected")
        return value


class ApplicationRead(CamelModel):
    """Serialized application."""

    id: uuid.UUID
    pet_id: uuid.UUID | None = None
    applicant_id: uuid.UUID
    status: ApplicationStatus
    reason: str
    experience: str
    living_space: LivingSpace
    has_other_pets: bool
    admin_notes: str | None = None
    reviewed_by_id: uuid.UUID | None = None
    reviewed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    pet: PetSummary | None = None
    applicant: AccountSummary | None = None
    reviewed_by: AccountSummary | None = None


__all__ = ["ApplicationCreate", "ApplicationRead", "ApplicationReview"]
