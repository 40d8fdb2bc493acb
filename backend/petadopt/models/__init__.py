"""ORM models package export."""

from petadopt.models.account import Account, AccountRole
from petadopt.models.application import (
    AdoptionApplication,
    ApplicationStatus,
    LivingSpace,
)
from petadopt.models.pet import Pet, PetGender, PetSize, PetSpecies, PetStatus

__all__ = [
    "Account",
    "AccountRole",
    "AdoptionApplication",
    "ApplicationStatus",
    "LivingSpace",
    "Pet",
    "PetGender",
    "PetSize",
    "PetSpecies",
    "PetStatus",
]
