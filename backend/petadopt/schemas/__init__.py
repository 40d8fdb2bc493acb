"""Schema exports."""

from petadopt.schemas.account import AccountProfileUpdate, AccountRead, AccountSummary
from petadopt.schemas.application import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationReview,
)
from petadopt.schemas.auth import (
    AuthSession,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshTokenRequest,
    RefreshTokenResponse,
    RegistrationRequest,
    ResetPasswordRequest,
    ResetTokenResponse,
)
from petadopt.schemas.common import CamelModel, Envelope, FieldError
from petadopt.schemas.pet import (
    PetCreate,
    PetRead,
    PetStatusUpdate,
    PetSummary,
    PetUpdate,
)

__all__ = [
    "AccountProfileUpdate",
    "AccountRead",
    "AccountSummary",
    "ApplicationCreate",
    "ApplicationRead",
    "ApplicationReview",
    "AuthSession",
    "CamelModel",
    "ChangePasswordRequest",
    "Envelope",
    "FieldError",
    "ForgotPasswordRequest",
    "LoginRequest",
    "PetCreate",
    "PetRead",
    "PetStatusUpdate",
    "PetSummary",
    "PetUpdate",
    "RefreshTokenRequest",
    "RefreshTokenResponse",
    "RegistrationRequest",
    "ResetPasswordRequest",
    "ResetTokenResponse",
]
