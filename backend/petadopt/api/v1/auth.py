"""Authentication endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from petadopt.api.deps import (
    DEFAULT_RATE,
    LOGIN_RATE,
    CurrentAccount,
    DbSession,
    Tokens,
    get_credentials_config,
)
from petadopt.core.settings import CredentialSettings
from petadopt.schemas.account import AccountProfileUpdate, AccountRead
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
from petadopt.schemas.common import Envelope, ok
from petadopt.services import account_service, auth_service, password_reset_service
from petadopt.services.errors import InvalidArgumentError

router = APIRouter()


@router.post(
    "/register",
    response_model=Envelope[AuthSession],
    status_code=status.HTTP_201_CREATED,
    summary="Register a member account",
    dependencies=[DEFAULT_RATE],
)
async def register(
    payload: RegistrationRequest, session: DbSession, tokens: Tokens
) -> dict:
    """Create a member account and sign it in.

    Registration never grants the administrator role.
    """
    account = await account_service.create_account(
        session,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        address=payload.address,
    )
    return ok(auth_service.issue_session(tokens, account))


@router.post(
    "/login",
    response_model=Envelope[AuthSession],
    summary="Obtain a token pair",
    dependencies=[LOGIN_RATE],
)
async def login(payload: LoginRequest, session: DbSession, tokens: Tokens) -> dict:
    auth_session = await auth_service.login(
        session, tokens, email=payload.email, password=payload.password
    )
    return ok(auth_session)


@router.post(
    "/refresh-token",
    response_model=Envelope[RefreshTokenResponse],
    summary="Exchange a refresh token for a new access token",
    dependencies=[DEFAULT_RATE],
)
async def refresh_token(
    payload: RefreshTokenRequest, session: DbSession, tokens: Tokens
) -> dict:
    if not payload.refresh_token:
        raise InvalidArgumentError("Refresh token is required")
    access_token = await auth_service.refresh_access_token(
        session, tokens, payload.refresh_token
    )
    return ok(
        RefreshTokenResponse(
            access_token=access_token, refresh_token=payload.refresh_token
        )
    )


@router.get("/me", response_model=Envelope[AccountRead], summary="Current account")
async def read_me(current_account: CurrentAccount) -> dict:
    return ok(AccountRead.model_validate(current_account))


@router.patch(
    "/me", response_model=Envelope[AccountRead], summary="Update own profile"
)
async def update_me(
    payload: AccountProfileUpdate,
    session: DbSession,
    current_account: CurrentAccount,
) -> dict:
    """Update name, phone or address; email and role are not editable."""
    account = await account_service.update_profile(session, current_account, payload)
    return ok(AccountRead.model_validate(account))


@router.post(
    "/forgot-password",
    response_model=Envelope[ResetTokenResponse],
    summary="Issue a password reset token",
    dependencies=[DEFAULT_RATE],
)
async def forgot_password(
    payload: ForgotPasswordRequest,
    session: DbSession,
    credentials: Annotated[CredentialSettings, Depends(get_credentials_config)],
) -> dict:
    """Return the reset token directly; nothing is mailed."""
    raw_token, _ = await password_reset_service.create_reset_token(
        session, email=payload.email, settings=credentials
    )
    return ok(
        ResetTokenResponse(reset_token=raw_token),
        message="Password reset token generated",
    )


@router.post(
    "/reset-password/{token}",
    response_model=Envelope[None],
    summary="Set a new password with a reset token",
    dependencies=[DEFAULT_RATE],
)
async def reset_password(
    token: str, payload: ResetPasswordRequest, session: DbSession
) -> dict:
    await password_reset_service.consume_reset_token(
        session, token=token, new_password=payload.password
    )
    return ok(message="Password reset successful")


@router.post(
    "/change-password",
    response_model=Envelope[None],
    summary="Change the current password",
)
async def change_password(
    payload: ChangePasswordRequest,
    session: DbSession,
    current_account: CurrentAccount,
) -> dict:
    await account_service.change_password(
        session,
        current_account,
        current_password=payload.current_password,
        new_password=payload.new_password,
    )
    return ok(message="Password changed successfully")
