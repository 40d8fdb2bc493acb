"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

import redis.asyncio as redis  # type: ignore[import-untyped]
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi_limiter import FastAPILimiter
from redis.exceptions import RedisError
from secure import Secure

from petadopt.api.errors import register_exception_handlers
from petadopt.api.v1 import router as api_v1_router
from petadopt.core.config import Settings, get_settings
from petadopt.core.logging import configure_logging
from petadopt.db.session import dispose_engine
from petadopt.services.bootstrap_service import ensure_default_admin

logger = logging.getLogger(__name__)


async def _start_rate_limiter(redis_url: str | None):
    """Connect fastapi-limiter to Redis; limits stay off without it."""
    if not redis_url:
        logger.info("REDIS_URL not set; rate limiting disabled")
        return None
    pool = redis.from_url(redis_url, encoding="utf-8", decode_responses=True)
    try:
        await FastAPILimiter.init(pool)
    except (RedisError, OSError):
        logger.exception("Rate limiter unavailable; continuing without it")
        FastAPILimiter.redis = None
        await pool.aclose()
        return None
    return pool


async def _stop_rate_limiter(pool) -> None:
    if pool is None:
        return
    try:
        await FastAPILimiter.close()
    finally:
        FastAPILimiter.redis = None
        await pool.aclose()


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    pool = await _start_rate_limiter(settings.redis_url)
    await ensure_default_admin()
    try:
        yield
    finally:
        await _stop_rate_limiter(pool)
        await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Assemble middleware, error handlers and routers."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title=settings.app_name, lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins or ["http://localhost:5173"],
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    application.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

    secure_headers = Secure.with_default_headers()

    @application.middleware("http")
    async def _security_headers(request, call_next):
        response = await call_next(request)
        await secure_headers.set_headers_async(response)
        return response

    register_exception_handlers(application)
    application.include_router(api_v1_router, prefix=settings.api_prefix)

    @application.get("/", include_in_schema=False)
    async def root() -> dict[str, object]:
        return {"success": True, "message": "Pet Adoption API is running"}

    return application


app = create_app()
