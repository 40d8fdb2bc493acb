"""Logging configuration with request correlation ids."""

from __future__ import annotations

import logging
import sys

from asgi_correlation_id import CorrelationIdFilter

from petadopt.security.logging_filters import SensitiveFilter

LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"

_HANDLER_NAME = "petadopt"


def configure_logging(level: str | int = "INFO") -> None:
    """Attach a correlation-aware stream handler to the root logger once."""

    root = logging.getLogger()
    if not any(handler.get_name() == _HANDLER_NAME for handler in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(CorrelationIdFilter(uuid_length=32, default_value="-"))
        handler.addFilter(SensitiveFilter())
        root.addHandler(handler)

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        level = resolved if isinstance(resolved, int) else logging.INFO
    root.setLevel(level)

    for logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        named = logging.getLogger(logger_name)
        if not any(isinstance(flt, SensitiveFilter) for flt in named.filters):
            named.addFilter(SensitiveFilter())


__all__ = ["configure_logging"]
