"""Adoption application API."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from petadopt.api.deps import AdminAccount, CurrentAccount, DbSession
from petadopt.models.application import ApplicationStatus
from petadopt.schemas.application import (
    ApplicationCreate,
    ApplicationRead,
    ApplicationReview,
)
from petadopt.schemas.common import Envelope, ok, paginated
from petadopt.services import application_service
from petadopt.services.errors import InvalidArgumentError

router = APIRouter()

MAX_PAGE_SIZE = 100


def _parse_status(value: str | None) -> ApplicationStatus | None:
    if value is None or not value.strip():
        return None
    try:
        return ApplicationStatus(value.strip().lower())
    except ValueError as exc:
        raise InvalidArgumentError("Invalid status") from exc


@router.post(
    "",
    response_model=Envelope[ApplicationRead],
    status_code=status.HTTP_201_CREATED,
    summary="Apply to adopt a pet",
)
async def create_application(
    payload: ApplicationCreate, session: DbSession, current_account: CurrentAccount
) -> dict:
    application = await application_service.create_application(
        session, applicant=current_account, payload=payload
    )
    return ok(
        ApplicationRead.model_validate(application),
        message="Application submitted successfully",
    )


# Declared before "/{application_id}" so the literal path wins.
@router.get(
    "/my-applications",
    response_model=Envelope[list[ApplicationRead]],
    summary="List own applications",
)
async def list_my_applications(
    session: DbSession, current_account: CurrentAccount
) -> dict:
    applications = await application_service.list_my_applications(
        session, account_id=current_account.id
    )
    items = [ApplicationRead.model_validate(item) for item in applications]
    return {"success": True, "count": len(items), "data": items}


@router.get(
    "",
    response_model=Envelope[list[ApplicationRead]],
    summary="List all applications",
)
async def list_applications(
    session: DbSession,
    _: AdminAccount,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1),
    status_filter: str | None = Query(default=None, alias="status"),
) -> dict:
    page_size = min(limit, MAX_PAGE_SIZE)
    applications, total = await application_service.list_applications(
        session,
        status=_parse_status(status_filter),
        page=page,
        page_size=page_size,
    )
    return paginated(
        [ApplicationRead.model_validate(item) for item in applications],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/{application_id}",
    response_model=Envelope[ApplicationRead],
    summary="Get application",
)
async def get_application(
    application_id: uuid.UUID, session: DbSession, current_account: CurrentAccount
) -> dict:
    """Visible to the applicant and to administrators."""
    application = await application_service.get_application(
        session, application_id=application_id, requester=current_account
    )
    return ok(ApplicationRead.model_validate(application))


@router.patch(
    "/{application_id}/review",
    response_model=Envelope[ApplicationRead],
    summary="Approve or reject an application",
)
async def review_application(
    application_id: uuid.UUID,
    payload: ApplicationReview,
    session: DbSession,
    current_account: AdminAccount,
) -> dict:
    application = await application_service.review_application(
        session,
        application_id=application_id,
        reviewer=current_account,
        decision=payload.status,
        notes=payload.admin_notes,
    )
    return ok(
        ApplicationRead.model_validate(application),
        message=f"Application {application.status.value} successfully",
    )


@router.delete(
    "/{application_id}",
    response_model=Envelope[dict],
    summary="Withdraw a pending application",
)
async def delete_application(
    application_id: uuid.UUID, session: DbSession, current_account: CurrentAccount
) -> dict:
    await application_service.delete_application(
        session, application_id=application_id, requester=current_account
    )
    return ok({}, message="Application deleted successfully")
