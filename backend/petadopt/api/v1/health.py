"""Liveness and database reachability."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from petadopt.api.deps import DbSession
from petadopt.core.config import get_settings
from petadopt.services.errors import UnavailableError

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", summary="Service health status")
async def healthcheck(session: DbSession) -> dict[str, str]:
    settings = get_settings()
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Health check database ping failed: %s", exc)
        raise UnavailableError() from exc
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.app_env,
        "database": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
    }
