"""Pet catalog service helpers."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Sequence

from sqlalchemy import ColumnElement, false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from petadopt.models.account import Account
from petadopt.models.pet import Pet, PetStatus, PetSpecies
from petadopt.schemas.pet import PetCreate, PetUpdate
from petadopt.services.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


def _parse_enum(enum_cls: type[Any], value: str | None) -> tuple[Any, bool]:
    """Return ``(member, known)``; blank values are ``(None, True)``."""
    if value is None or not value.strip():
        return None, True
    try:
        return enum_cls(value.strip().lower()), True
    except ValueError:
        return None, False


@dataclass(frozen=True, slots=True)
class PetFilter:
    """Typed catalog filter turned into SQL predicates.

    ``status`` defaults to available so anonymous browsing only sees pets
    that can still be adopted. A species or status outside the enums cannot
    match any row, so ``unmatchable`` turns the listing into an empty page.
    """

    species: PetSpecies | None = None
    breed: str | None = None
    min_age: int | None = None
    max_age: int | None = None
    status: PetStatus = PetStatus.AVAILABLE
    search: str | None = None
    unmatchable: bool = False

    @classmethod
    def from_params(
        cls,
        *,
        species: str | None = None,
        breed: str | None = None,
        min_age: int | None = None,
        max_age: int | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> "PetFilter":
        """Build a filter from raw query parameters."""
        parsed_species, species_known = _parse_enum(PetSpecies, species)
        parsed_status, status_known = _parse_enum(PetStatus, status)
        return cls(
            species=parsed_species,
            breed=breed.strip() if breed and breed.strip() else None,
            min_age=min_age,
            max_age=max_age,
            status=parsed_status or PetStatus.AVAILABLE,
            search=search.strip() if search and search.strip() else None,
            unmatchable=not (species_known and status_known),
        )

    def clauses(self) -> list[ColumnElement[bool]]:
        if self.unmatchable:
            return [false()]
        clauses: list[ColumnElement[bool]] = [Pet.status == self.status]
        if self.species is not None:
            clauses.append(Pet.species == self.species)
        if self.breed:
            clauses.append(
                func.lower(Pet.breed).contains(self.breed.lower(), autoescape=True)
            )
        if self.min_age is not None:
            clauses.append(Pet.age >= self.min_age)
        if self.max_age is not None:
            clauses.append(Pet.age <= self.max_age)
        if self.search:
            term = self.search.lower()
            clauses.append(
                or_(
                    func.lower(Pet.name).contains(term, autoescape=True),
                    func.lower(Pet.breed).contains(term, autoescape=True),
                )
            )
        return clauses


def _base_pet_query() -> Select[tuple[Pet]]:
    return select(Pet).options(selectinload(Pet.added_by))


async def list_pets(
    session: AsyncSession,
    *,
    filters: PetFilter,
    page: int = 1,
    page_size: int = 10,
) -> tuple[Sequence[Pet], int]:
    """Return one page of matching pets (newest first) and the total count."""
    clauses = filters.clauses()
    total = await session.scalar(
        select(func.count()).select_from(Pet).where(*clauses)
    )
    stmt = (
        _base_pet_query()
        .where(*clauses)
        .order_by(Pet.created_at.desc(), Pet.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    result = await session.execute(stmt)
    return result.scalars().all(), int(total or 0)


async def get_pet(session: AsyncSession, pet_id: uuid.UUID) -> Pet | None:
    """Return a single pet."""
    result = await session.execute(
        _base_pet_query()
        .where(Pet.id == pet_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def require_pet(session: AsyncSession, pet_id: uuid.UUID) -> Pet:
    pet = await get_pet(session, pet_id)
    if pet is None:
        raise NotFoundError("Pet not found")
    return pet


async def create_pet(
    session: AsyncSession, *, payload: PetCreate, added_by: Account
) -> Pet:
    """Create a pet listing; new pets always start available."""
    pet = Pet(
        **payload.model_dump(),
        status=PetStatus.AVAILABLE,
        added_by_id=added_by.id,
    )
    session.add(pet)
    await session.commit()
    logger.info("Pet %s created by %s", pet.id, added_by.id)
    return await require_pet(session, pet.id)


async def update_pet(
    session: AsyncSession, *, pet_id: uuid.UUID, payload: PetUpdate
) -> Pet:
    """Update descriptive fields of a pet."""
    pet = await require_pet(session, pet_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        # only the optional attributes can be cleared
        if value is None and field not in {"size", "color"}:
            continue
        setattr(pet, field, value)
    session.add(pet)
    await session.commit()
    return await require_pet(session, pet_id)


async def delete_pet(session: AsyncSession, *, pet_id: uuid.UUID) -> None:
    """Delete a pet unconditionally; open applications are left orphaned."""
    pet = await require_pet(session, pet_id)
    await session.delete(pet)
    await session.commit()
    logger.info("Pet %s deleted", pet_id)


async def set_status(
    session: AsyncSession, *, pet_id: uuid.UUID, status: PetStatus | str
) -> Pet:
    """Administrator override of a pet's status.

    This bypasses the application workflow and does not touch applications.
    """
    new_status, known = _parse_enum(PetStatus, getattr(status, "value", status))
    if new_status is None or not known:
        raise InvalidArgumentError("Invalid status")
    pet = await require_pet(session, pet_id)
    previous = pet.status
    pet.status = new_status
    session.add(pet)
    await session.commit()
    logger.info(
        "Pet %s status overridden from %s to %s",
        pet_id,
        previous.value,
        new_status.value,
    )
    return await require_pet(session, pet_id)
