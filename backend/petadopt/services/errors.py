"""Service-level exceptions.

These errors are framework agnostic: services raise them and the API layer
(``petadopt.api.errors``) translates them into HTTP responses. Expected
workflow refusals such as :class:`InvalidStateError` or :class:`ConflictError`
are ordinary outcomes, not server faults.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """Return True when an IntegrityError originates from ``constraint_name``.

    PostgreSQL reports the constraint name; SQLite only reports the columns,
    so callers may pass a column list such as ``"pet_id, applicant_id"``.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


class ServiceError(Exception):
    """Base class for all service errors."""

    status_code: int = 500
    default_message = "Server Error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """An identifier does not resolve to an entity."""

    status_code = 404
    default_message = "Resource not found"


class InvalidArgumentError(ServiceError):
    """Malformed or out-of-enum input."""

    status_code = 400
    default_message = "Invalid argument"


class UnauthenticatedError(ServiceError):
    """Missing, invalid or expired bearer credentials."""

    status_code = 401
    default_message = "Not authorized to access this route"


class InvalidTokenError(UnauthenticatedError):
    """A token failed signature, expiry or kind verification."""

    default_message = "Invalid or expired token"


class ForbiddenError(ServiceError):
    """Authenticated, but the role or ownership does not permit the action."""

    status_code = 403
    default_message = "Not authorized to perform this action"


class InvalidStateError(ServiceError):
    """The operation is not legal for the entity's current status."""

    status_code = 400
    default_message = "Operation not allowed in the current state"


class ConflictError(ServiceError):
    """A uniqueness rule would be violated.

    The public surface reports duplicates (taken email, repeated application)
    as 400, so the status code matches :class:`InvalidStateError`.
    """

    status_code = 400
    default_message = "Resource already exists"


class UnavailableError(ServiceError):
    """The storage layer failed or timed out."""

    status_code = 503
    default_message = "Service temporarily unavailable"


__all__ = [
    "ConflictError",
    "ForbiddenError",
    "InvalidArgumentError",
    "InvalidStateError",
    "InvalidTokenError",
    "NotFoundError",
    "ServiceError",
    "UnauthenticatedError",
    "UnavailableError",
    "violates",
]
