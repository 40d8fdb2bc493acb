"""Pet catalog API."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from petadopt.api.deps import AdminAccount, DbSession
from petadopt.schemas.common import Envelope, ok, paginated
from petadopt.schemas.pet import PetCreate, PetRead, PetStatusUpdate, PetUpdate
from petadopt.services import pet_service
from petadopt.services.pet_service import PetFilter

router = APIRouter()

MAX_PAGE_SIZE = 100


@router.get("", response_model=Envelope[list[PetRead]], summary="List pets")
async def list_pets(
    session: DbSession,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    species: str | None = Query(default=None),
    breed: str | None = Query(default=None),
    min_age: int | None = Query(default=None, ge=0, alias="minAge"),
    max_age: int | None = Query(default=None, ge=0, alias="maxAge"),
    status_filter: str | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None),
) -> dict:
    """Public, paginated catalog; only available pets unless ``status`` is given."""
    filters = PetFilter.from_params(
        species=species,
        breed=breed,
        min_age=min_age,
        max_age=max_age,
        status=status_filter,
        search=search,
    )
    page_size = min(limit, MAX_PAGE_SIZE)
    pets, total = await pet_service.list_pets(
        session, filters=filters, page=page, page_size=page_size
    )
    return paginated(
        [PetRead.model_validate(pet) for pet in pets],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{pet_id}", response_model=Envelope[PetRead], summary="Get pet")
async def get_pet(pet_id: uuid.UUID, session: DbSession) -> dict:
    pet = await pet_service.require_pet(session, pet_id)
    return ok(PetRead.model_validate(pet))


@router.post(
    "",
    response_model=Envelope[PetRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create pet",
)
async def create_pet(
    payload: PetCreate, session: DbSession, current_account: AdminAccount
) -> dict:
    pet = await pet_service.create_pet(
        session, payload=payload, added_by=current_account
    )
    return ok(PetRead.model_validate(pet))


@router.put("/{pet_id}", response_model=Envelope[PetRead], summary="Update pet")
async def update_pet(
    pet_id: uuid.UUID,
    payload: PetUpdate,
    session: DbSession,
    _: AdminAccount,
) -> dict:
    pet = await pet_service.update_pet(session, pet_id=pet_id, payload=payload)
    return ok(PetRead.model_validate(pet))


@router.delete("/{pet_id}", response_model=Envelope[dict], summary="Delete pet")
async def delete_pet(pet_id: uuid.UUID, session: DbSession, _: AdminAccount) -> dict:
    """Delete unconditionally; applications referencing the pet are kept."""
    await pet_service.delete_pet(session, pet_id=pet_id)
    return ok({}, message="Pet deleted")


@router.patch(
    "/{pet_id}/status",
    response_model=Envelope[PetRead],
    summary="Override pet status",
)
async def set_pet_status(
    pet_id: uuid.UUID,
    payload: PetStatusUpdate,
    session: DbSession,
    _: AdminAccount,
) -> dict:
    """Administrator escape hatch; applications are left untouched."""
    pet = await pet_service.set_status(session, pet_id=pet_id, status=payload.status)
    return ok(PetRead.model_validate(pet))
