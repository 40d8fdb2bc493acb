"""Translate service and framework errors into the response envelope."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from petadopt.schemas.common import Envelope, FieldError
from petadopt.services.errors import ServiceError, UnavailableError

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


def _envelope(
    status_code: int,
    message: str,
    *,
    errors: list[FieldError] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = Envelope[Any](success=False, message=message, errors=errors)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(mode="json"), headers=headers
    )


def _field_errors(exc: RequestValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in {"body", "query", "path", "header"}:
            location = location[1:]
        message = str(error.get("msg", "Invalid value"))
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX) :]
        errors.append(FieldError(field=".".join(location) or "body", message=message))
    return errors


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, UnavailableError):
        logger.error("%s %s unavailable: %s", request.method, request.url.path, exc)
    else:
        logger.info(
            "%s %s refused (%d): %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return _envelope(exc.status_code, exc.message, headers=headers)


async def _validation_error_handler(
    _: Request, exc: RequestValidationError
) -> JSONResponse:
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        errors=_field_errors(exc),
    )


async def _http_error_handler(
    _: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _envelope(exc.status_code, message, headers=getattr(exc, "headers", None))


async def _storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Storage failure while handling %s %s", request.method, request.url.path
    )
    return _envelope(
        status.HTTP_503_SERVICE_UNAVAILABLE, UnavailableError.default_message
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error while handling %s %s", request.method, request.url.path
    )
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server Error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach envelope-producing handlers to the application."""

    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    for storage_error in (OperationalError, InterfaceError, PoolTimeoutError):
        app.add_exception_handler(storage_error, _storage_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)


__all__ = ["register_exception_handlers"]
