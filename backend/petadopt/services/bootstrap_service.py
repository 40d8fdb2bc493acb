"""Startup data: the configured administrator account."""

from __future__ import annotations

import logging

from petadopt.core.config import get_settings
from petadopt.db.session import session_scope
from petadopt.models import AccountRole
from petadopt.services import account_service

logger = logging.getLogger(__name__)


async def ensure_default_admin() -> None:
    """Create DEFAULT_ADMIN_EMAIL as an administrator if it is missing.

    Registration only ever creates members, so this (or the promote_admin
    script) is how the first administrator appears. Nothing happens unless
    both the email and the password are configured.
    """

    settings = get_settings()
    if not settings.default_admin_email or not settings.default_admin_password:
        return

    async with session_scope() as session:
        existing = await account_service.get_account_by_email(
            session, settings.default_admin_email
        )
        if existing is not None:
            logger.debug("Default administrator already present")
            return

        account = await account_service.create_account(
            session,
            name=settings.default_admin_name,
            email=settings.default_admin_email,
            password=settings.default_admin_password,
            role=AccountRole.ADMINISTRATOR,
        )
        logger.info("Default administrator %s created", account.id)
