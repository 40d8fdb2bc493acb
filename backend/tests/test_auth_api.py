"""Authentication API tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from petadopt.db.session import get_sessionmaker
from petadopt.models import Account, AccountRole

pytestmark = pytest.mark.asyncio


async def _login(client: AsyncClient, email: str, password: str) -> dict[str, Any]:
    response = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def _fetch_account(db_url: str, email: str) -> Account | None:
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        result = await session.execute(select(Account).where(Account.email == email))
        return result.scalar_one_or_none()


async def test_register_creates_member_and_returns_tokens(
    app_context: dict[str, Any], db_url: str
) -> None:
    client: AsyncClient = app_context["client"]
    payload = {
        "name": "Riley Rescuer",
        "email": "Riley@Example.com",
        "password": "secret1",
        "phone": "555-0100",
    }
    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["email"] == "riley@example.com"
    assert data["role"] == "member"
    assert data["accessToken"] and data["refreshToken"]

    account = await _fetch_account(db_url, "riley@example.com")
    assert account is not None
    assert account.hashed_password != payload["password"]
    assert account.role == AccountRole.MEMBER


async def test_register_ignores_role_in_payload(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "name": "Sneaky",
            "email": "sneaky@example.com",
            "password": "secret1",
            "role": "administrator",
        },
    )
    assert response.status_code == 201
    assert response.json()["data"]["role"] == "member"


async def test_register_rejects_taken_email(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/register",
        json={
            "name": "Duplicate",
            "email": app_context["member_email"].upper(),
            "password": "secret1",
        },
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "User already exists with this email"


async def test_register_validation_errors_are_per_field(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/register",
        json={"name": "", "email": "not-an-email", "password": "123"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    fields = {error["field"] for error in body["errors"]}
    assert {"name", "email", "password"} <= fields


async def test_login_with_bad_password_is_unauthenticated(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": app_context["member_email"], "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid credentials"}


async def test_me_requires_bearer_token(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["message"] == "Not authorized to access this route"

    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


async def test_me_and_profile_update(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    session = await _login(
        client, app_context["member_email"], app_context["member_password"]
    )
    headers = {"Authorization": f"Bearer {session['accessToken']}"}

    me = await client.get("/api/v1/auth/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["data"]["email"] == app_context["member_email"]
    assert "hashedPassword" not in me.json()["data"]

    updated = await client.patch(
        "/api/v1/auth/me",
        json={"name": "Morgan M.", "phone": "555-0199", "role": "administrator"},
        headers=headers,
    )
    assert updated.status_code == 200
    data = updated.json()["data"]
    assert data["name"] == "Morgan M."
    assert data["phone"] == "555-0199"
    assert data["role"] == "member"


async def test_refresh_token_flow(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    session = await _login(
        client, app_context["member_email"], app_context["member_password"]
    )

    response = await client.post(
        "/api/v1/auth/refresh-token", json={"refreshToken": session["refreshToken"]}
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["refreshToken"] == session["refreshToken"]

    me = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {data['accessToken']}"}
    )
    assert me.status_code == 200


async def test_refresh_token_errors(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    missing = await client.post("/api/v1/auth/refresh-token", json={})
    assert missing.status_code == 400

    invalid = await client.post(
        "/api/v1/auth/refresh-token", json={"refreshToken": "garbage"}
    )
    assert invalid.status_code == 401
    assert invalid.json()["message"] == "Invalid or expired refresh token"

    session = await _login(
        client, app_context["member_email"], app_context["member_password"]
    )
    access_as_refresh = await client.post(
        "/api/v1/auth/refresh-token", json={"refreshToken": session["accessToken"]}
    )
    assert access_as_refresh.status_code == 401


async def test_refresh_token_cannot_authenticate_requests(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    session = await _login(
        client, app_context["member_email"], app_context["member_password"]
    )
    response = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {session['refreshToken']}"},
    )
    assert response.status_code == 401


async def test_password_reset_flow(app_context: dict[str, Any], db_url: str) -> None:
    client: AsyncClient = app_context["client"]
    email = app_context["member_email"]

    unknown = await client.post(
        "/api/v1/auth/forgot-password", json={"email": "nobody@example.com"}
    )
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "No user found with that email"

    issued = await client.post("/api/v1/auth/forgot-password", json={"email": email})
    assert issued.status_code == 200
    reset_token = issued.json()["data"]["resetToken"]

    account = await _fetch_account(db_url, email)
    assert account is not None
    assert account.reset_token_hash and account.reset_token_hash != reset_token

    reset = await client.post(
        f"/api/v1/auth/reset-password/{reset_token}", json={"password": "brandnew1"}
    )
    assert reset.status_code == 200
    assert reset.json()["success"] is True

    reused = await client.post(
        f"/api/v1/auth/reset-password/{reset_token}", json={"password": "another1"}
    )
    assert reused.status_code == 400

    await _login(client, email, "brandnew1")
    old = await client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": app_context["member_password"]},
    )
    assert old.status_code == 401


async def test_new_reset_request_replaces_previous_token(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    email = app_context["member_email"]
    first = await client.post("/api/v1/auth/forgot-password", json={"email": email})
    second = await client.post("/api/v1/auth/forgot-password", json={"email": email})
    first_token = first.json()["data"]["resetToken"]
    second_token = second.json()["data"]["resetToken"]

    stale = await client.post(
        f"/api/v1/auth/reset-password/{first_token}", json={"password": "brandnew1"}
    )
    assert stale.status_code == 400
    fresh = await client.post(
        f"/api/v1/auth/reset-password/{second_token}", json={"password": "brandnew1"}
    )
    assert fresh.status_code == 200


async def test_change_password(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    email = app_context["member_email"]
    session = await _login(client, email, app_context["member_password"])
    headers = {"Authorization": f"Bearer {session['accessToken']}"}

    wrong = await client.post(
        "/api/v1/auth/change-password",
        json={"currentPassword": "nope", "newPassword": "changed1"},
        headers=headers,
    )
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Current password is incorrect"

    changed = await client.post(
        "/api/v1/auth/change-password",
        json={
            "currentPassword": app_context["member_password"],
            "newPassword": "changed1",
        },
        headers=headers,
    )
    assert changed.status_code == 200
    await _login(client, email, "changed1")
