"""Shared schema building blocks and the response envelope."""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_serializer
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FieldError(BaseModel):
    """A single per-field validation problem."""

    field: str
    message: str


class Envelope(BaseModel, Generic[DataT]):
    """Common response body: ``{success, data?, message?, errors?, ...}``."""

    success: bool = True
    message: str | None = None
    count: int | None = None
    total: int | None = None
    page: int | None = None
    pages: int | None = None
    data: DataT | None = None
    errors: list[FieldError] | None = None

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: Any) -> dict[str, Any]:
        payload = handler(self)
        return {key: value for key, value in payload.items() if value is not None}


def ok(data: Any = None, *, message: str | None = None) -> dict[str, Any]:
    """Build a successful envelope payload."""
    return {"success": True, "data": data, "message": message}


def paginated(
    items: list[Any], *, total: int, page: int, page_size: int
) -> dict[str, Any]:
    """Build a paginated envelope payload."""
    return {
        "success": True,
        "count": len(items),
        "total": total,
        "page": page,
        "pages": math.ceil(total / page_size) if page_size else 0,
        "data": items,
    }


__all__ = ["CamelModel", "Envelope", "FieldError", "ok", "paginated"]
