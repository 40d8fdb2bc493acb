"""Health and root endpoint smoke tests."""

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from petadopt.main import app


@pytest.mark.asyncio
async def test_healthcheck_pings_database(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["database"] == "ok"
    assert payload["service"] == "Pet Adoption API"


@pytest.mark.asyncio
async def test_healthcheck_reports_unavailable_database(
    app_context: dict[str, Any], monkeypatch: pytest.MonkeyPatch
) -> None:
    from sqlalchemy.ext.asyncio import AsyncSession

    async def _broken_execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(AsyncSession, "execute", _broken_execute)
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/health")
    assert response.status_code == 503
    assert response.json() == {
        "success": False,
        "message": "Service temporarily unavailable",
    }


@pytest.mark.asyncio
async def test_root_reports_running() -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Pet Adoption API is running",
    }
    assert response.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope() -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Not Found"
