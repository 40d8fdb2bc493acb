"""Adoption workflow: application lifecycle and the pet status it drives.

A pet is ``available`` until an application is created, ``pending`` while any
application for it is pending, and ``adopted`` once one application is
approved. Every operation here runs as one transaction; status changes are
compare-and-swap updates (``UPDATE ... WHERE status = <expected>``) whose row
counts are checked, and review/delete lock the pet row first so concurrent
decisions on sibling applications serialize.
"""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from petadopt.models.account import Account
from petadopt.models.application import (
    PET_APPLICANT_CONSTRAINT,
    AdoptionApplication,
    ApplicationStatus,
)
from petadopt.models.pet import Pet, PetStatus
from petadopt.schemas.application import REVIEW_DECISIONS, ApplicationCreate
from petadopt.security.permissions import is_administrator
from petadopt.services.errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    violates,
)

logger = logging.getLogger(__name__)

ADOPTED_BY_ANOTHER_NOTE = "pet adopted by another applicant"

_PET_NOT_AVAILABLE = "This pet is not available for adoption"
_ALREADY_APPLIED = "You have already applied for this pet"
_ALREADY_REVIEWED = "Application has already been reviewed"
_ALREADY_ADOPTED = "This pet has already been adopted"


def _base_application_query() -> Select[tuple[AdoptionApplication]]:
    return select(AdoptionApplication).options(
        selectinload(AdoptionApplication.pet),
        selectinload(AdoptionApplication.applicant),
        selectinload(AdoptionApplication.reviewed_by),
    )


async def _load_application(
    session: AsyncSession, application_id: uuid.UUID
) -> AdoptionApplication:
    result = await session.execute(
        _base_application_query()
        .where(AdoptionApplication.id == application_id)
        .execution_options(populate_existing=True)
    )
    application = result.scalar_one_or_none()
    if application is None:
        raise NotFoundError("Application not found")
    return application


async def _lock_pet(session: AsyncSession, pet_id: uuid.UUID | None) -> Pet | None:
    """Take the per-pet lock for the rest of the transaction."""
    if pet_id is None:
        return None
    result = await session.execute(
        select(Pet)
        .where(Pet.id == pet_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _count_for_pet(
    session: AsyncSession, pet_id: uuid.UUID, status: ApplicationStatus
) -> int:
    count = await session.scalar(
        select(func.count())
        .select_from(AdoptionApplication)
        .where(
            AdoptionApplication.pet_id == pet_id,
            AdoptionApplication.status == status,
        )
    )
    return int(count or 0)


async def _release_pet_if_unclaimed(
    session: AsyncSession, pet_id: uuid.UUID | None
) -> bool:
    """Return the pet to ``available`` when nothing claims it any more."""
    if pet_id is None:
        return False
    if await _count_for_pet(session, pet_id, ApplicationStatus.PENDING):
        return False
    if await _count_for_pet(session, pet_id, ApplicationStatus.APPROVED):
        return False
    result = await session.execute(
        update(Pet)
        .where(Pet.id == pet_id, Pet.status != PetStatus.AVAILABLE)
        .values(status=PetStatus.AVAILABLE)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


async def create_application(
    session: AsyncSession, *, applicant: Account, payload: ApplicationCreate
) -> AdoptionApplication:
    """Submit an application and move the pet to ``pending``.

    Preconditions are checked in order: the pet exists, it is available,
    and the applicant has never applied for it before.
    """
    pet = await session.get(Pet, payload.pet_id, populate_existing=True)
    if pet is None:
        raise NotFoundError("Pet not found")
    if pet.status != PetStatus.AVAILABLE:
        raise InvalidStateError(_PET_NOT_AVAILABLE)

    existing = await session.scalar(
        select(AdoptionApplication.id).where(
            AdoptionApplication.pet_id == pet.id,
            AdoptionApplication.applicant_id == applicant.id,
        )
    )
    if existing is not None:
        raise ConflictError(_ALREADY_APPLIED)

    application = AdoptionApplication(
        pet_id=pet.id,
        applicant_id=applicant.id,
        status=ApplicationStatus.PENDING,
        reason=payload.reason,
        experience=payload.experience,
        living_space=payload.living_space,
        has_other_pets=payload.has_other_pets,
    )
    session.add(application)
    try:
        await session.flush()
        claimed = await session.execute(
            update(Pet)
            .where(Pet.id == pet.id, Pet.status == PetStatus.AVAILABLE)
            .values(status=PetStatus.PENDING)
            .execution_options(synchronize_session=False)
        )
        if claimed.rowcount != 1:
            await session.rollback()
            raise InvalidStateError(_PET_NOT_AVAILABLE)
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if violates(exc, PET_APPLICANT_CONSTRAINT) or violates(
            exc, "adoption_applications.pet_id"
        ):
            raise ConflictError(_ALREADY_APPLIED) from exc
        raise

    logger.info(
        "Application %s created by %s for pet %s",
        application.id,
        applicant.id,
        pet.id,
    )
    return await _load_application(session, application.id)


async def review_application(
    session: AsyncSession,
    *,
    application_id: uuid.UUID,
    reviewer: Account,
    decision: ApplicationStatus,
    notes: str | None = None,
) -> AdoptionApplication:
    """Approve or reject a pending application.

    Approval adopts the pet and rejects every other pending application for
    it. Rejection returns the pet to ``available`` when no pending sibling
    remains. Reviews are final.
    """
    if decision not in REVIEW_DECISIONS:
        raise InvalidArgumentError("Status must be either approved or rejected")

    application = await _load_application(session, application_id)
    if application.status != ApplicationStatus.PENDING:
        raise InvalidStateError(_ALREADY_REVIEWED)

    pet_id = application.pet_id
    pet = await _lock_pet(session, pet_id)
    reviewed_at = datetime.now(UTC)

    if decision is ApplicationStatus.APPROVED:
        if pet is None:
            await session.rollback()
            raise InvalidStateError(_ALREADY_ADOPTED)
        if await _count_for_pet(session, pet.id, ApplicationStatus.APPROVED):
            await session.rollback()
            raise InvalidStateError(_ALREADY_ADOPTED)

    decided = await session.execute(
        update(AdoptionApplication)
        .where(
            AdoptionApplication.id == application_id,
            AdoptionApplication.status == ApplicationStatus.PENDING,
        )
        .values(
            status=decision,
            admin_notes=notes,
            reviewed_by_id=reviewer.id,
            reviewed_at=reviewed_at,
        )
        .execution_options(synchronize_session=False)
    )
    if decided.rowcount != 1:
        await session.rollback()
        raise InvalidStateError(_ALREADY_REVIEWED)

    if decision is ApplicationStatus.APPROVED:
        adopted = await session.execute(
            update(Pet)
            .where(Pet.id == pet_id, Pet.status != PetStatus.ADOPTED)
            .values(status=PetStatus.ADOPTED)
            .execution_options(synchronize_session=False)
        )
        if adopted.rowcount != 1:
            await session.rollback()
            raise InvalidStateError(_ALREADY_ADOPTED)

        cascaded = await session.execute(
            update(AdoptionApplication)
            .where(
                AdoptionApplication.pet_id == pet_id,
                AdoptionApplication.id != application_id,
                AdoptionApplication.status == ApplicationStatus.PENDING,
            )
            .values(
                status=ApplicationStatus.REJECTED,
                admin_notes=ADOPTED_BY_ANOTHER_NOTE,
                reviewed_by_id=reviewer.id,
                reviewed_at=reviewed_at,
            )
            .execution_options(synchronize_session=False)
        )
        await session.commit()
        logger.info(
            "Application %s approved by %s; pet %s adopted, %d sibling(s) rejected",
            application_id,
            reviewer.id,
            pet_id,
            cascaded.rowcount,
        )
    else:
        released = await _release_pet_if_unclaimed(session, pet_id)
        await session.commit()
        logger.info(
            "Application %s rejected by %s; pet %s %s",
            application_id,
            reviewer.id,
            pet_id,
            "released" if released else "unchanged",
        )

    return await _load_application(session, application_id)


async def delete_application(
    session: AsyncSession, *, application_id: uuid.UUID, requester: Account
) -> None:
    """Withdraw one's own pending application.

    Administrators get no override here: only the applicant may delete.
    """
    application = await _load_application(session, application_id)
    if application.applicant_id != requester.id:
        raise ForbiddenError("Not authorized to delete this application")
    if application.status != ApplicationStatus.PENDING:
        raise InvalidStateError("Cannot delete reviewed applications")

    pet_id = application.pet_id
    await _lock_pet(session, pet_id)
    removed = await session.execute(
        delete(AdoptionApplication)
        .where(
            AdoptionApplication.id == application_id,
            AdoptionApplication.status == ApplicationStatus.PENDING,
        )
        .execution_options(synchronize_session=False)
    )
    if removed.rowcount != 1:
        await session.rollback()
        raise InvalidStateError("Cannot delete reviewed applications")

    released = await _release_pet_if_unclaimed(session, pet_id)
    await session.commit()
    session.expunge(application)
    logger.info(
        "Application %s withdrawn by %s; pet %s %s",
        application_id,
        requester.id,
        pet_id,
        "released" if released else "unchanged",
    )


async def list_my_applications(
    session: AsyncSession, *, account_id: uuid.UUID
) -> Sequence[AdoptionApplication]:
    """Return every application submitted by the account, newest first."""
    result = await session.execute(
        _base_application_query()
        .where(AdoptionApplication.applicant_id == account_id)
        .order_by(AdoptionApplication.created_at.desc())
    )
    return result.scalars().all()


async def list_applications(
    session: AsyncSession,
    *,
    status: ApplicationStatus | None = None,
    page: int = 1,
    page_size: int = 10,
) -> tuple[Sequence[AdoptionApplication], int]:
    """Return one page of applications (newest first) and the total count."""
    clauses = []
    if status is not None:
        clauses.append(AdoptionApplication.status == status)
    total = await session.scalar(
        select(func.count()).select_from(AdoptionApplication).where(*clauses)
    )
    result = await session.execute(
        _base_application_query()
        .where(*clauses)
        .order_by(AdoptionApplication.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    return result.scalars().all(), int(total or 0)


async def get_application(
    session: AsyncSession, *, application_id: uuid.UUID, requester: Account
) -> AdoptionApplication:
    """Return an application visible to its applicant or an administrator."""
    application = await _load_application(session, application_id)
    if application.applicant_id != requester.id and not is_administrator(requester):
        raise ForbiddenError("Not authorized to access this application")
    return application
