"""Pet catalog API tests."""

from __future__ import annotations

import uuid
from typing import Any

import pytest
from httpx import AsyncClient

from petadopt.db.session import get_sessionmaker
from petadopt.models import Pet, PetGender, PetSpecies, PetStatus

pytestmark = pytest.mark.asyncio


async def _auth_headers(client: AsyncClient, email: str, password: str) -> dict[str, str]:
    response = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['accessToken']}"}


async def _seed_pets(db_url: str, overrides: list[dict[str, Any]]) -> list[uuid.UUID]:
    sessionmaker = get_sessionmaker(db_url)
    ids: list[uuid.UUID] = []
    async with sessionmaker() as session:
        for override in overrides:
            fields: dict[str, Any] = {
                "name": "Pet",
                "species": PetSpecies.DOG,
                "breed": "Mixed",
                "age": 2,
                "gender": PetGender.FEMALE,
                "description": "Sweet",
            }
            fields.update(override)
            pet = Pet(**fields)
            session.add(pet)
            # one commit per pet keeps created_at strictly increasing
            await session.commit()
            ids.append(pet.id)
    return ids


def _pet_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": "Whiskers",
        "species": "Cat",
        "breed": "Siamese",
        "age": 4,
        "gender": "female",
        "size": "small",
        "description": "Calm lap cat",
        "vaccinated": True,
    }
    payload.update(overrides)
    return payload


async def test_admin_creates_pet(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _auth_headers(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    response = await client.post("/api/v1/pets", json=_pet_payload(), headers=headers)
    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["species"] == "cat"
    assert data["status"] == "available"
    assert data["addedById"] == str(app_context["admin_id"])
    assert data["addedBy"]["email"] == app_context["admin_email"]
    assert data["photo"].startswith("https://")


async def test_create_ignores_client_supplied_status(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _auth_headers(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    response = await client.post(
        "/api/v1/pets", json=_pet_payload(status="adopted"), headers=headers
    )
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "available"


async def test_member_cannot_manage_pets(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _auth_headers(
        client, app_context["member_email"], app_context["member_password"]
    )
    response = await client.post("/api/v1/pets", json=_pet_payload(), headers=headers)
    assert response.status_code == 403
    assert response.json()["message"] == (
        "User role 'member' is not authorized to access this route"
    )

    anonymous = await client.post("/api/v1/pets", json=_pet_payload())
    assert anonymous.status_code == 401


async def test_create_pet_validation(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _auth_headers(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    response = await client.post(
        "/api/v1/pets",
        json=_pet_payload(species="dragon", age=-1),
        headers=headers,
    )
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"species", "age"} <= fields


async def test_listing_defaults_to_available_newest_first(
    app_context: dict[str, Any], db_url: str
) -> None:
    client: AsyncClient = app_context["client"]
    older, adopted, newer = await _seed_pets(
        db_url,
        [
            {"name": "Older"},
            {"name": "Taken", "status": PetStatus.ADOPTED},
            {"name": "Newer"},
        ],
    )

    response = await client.get("/api/v1/pets")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [item["id"] for item in body["data"]] == [str(newer), str(older)]
    assert body["count"] == 2
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["pages"] == 1

    adopted_only = await client.get("/api/v1/pets", params={"status": "adopted"})
    assert [item["id"] for item in adopted_only.json()["data"]] == [str(adopted)]


async def test_listing_filters(app_context: dict[str, Any], db_url: str) -> None:
    client: AsyncClient = app_context["client"]
    await _seed_pets(
        db_url,
        [
            {"name": "Rex", "breed": "German Shepherd", "age": 5},
            {"name": "Luna", "breed": "Labrador Retriever", "age": 1},
            {"name": "Shep", "species": PetSpecies.CAT, "breed": "Persian", "age": 3},
        ],
    )

    by_species = await client.get("/api/v1/pets", params={"species": "CAT"})
    assert [item["name"] for item in by_species.json()["data"]] == ["Shep"]

    by_breed = await client.get("/api/v1/pets", params={"breed": "shepherd"})
    assert [item["name"] for item in by_breed.json()["data"]] == ["Rex"]

    by_age = await client.get("/api/v1/pets", params={"minAge": 2, "maxAge": 5})
    assert {item["name"] for item in by_age.json()["data"]} == {"Rex", "Shep"}

    # search matches name or breed
    search = await client.get("/api/v1/pets", params={"search": "shep"})
    assert {item["name"] for item in search.json()["data"]} == {"Rex", "Shep"}

    for params in ({"species": "hamster"}, {"status": "sold"}):
        unknown = await client.get("/api/v1/pets", params=params)
        assert unknown.status_code == 200
        body = unknown.json()
        assert body["success"] is True
        assert body["data"] == []
        assert body["total"] == 0
        assert body["pages"] == 0


async def test_listing_pagination(app_context: dict[str, Any], db_url: str) -> None:
    client: AsyncClient = app_context["client"]
    await _seed_pets(db_url, [{"name": f"Pet {index}"} for index in range(5)])

    response = await client.get("/api/v1/pets", params={"page": 2, "limit": 2})
    body = response.json()
    assert [item["name"] for item in body["data"]] == ["Pet 2", "Pet 1"]
    assert body["count"] == 2
    assert body["total"] == 5
    assert body["pages"] == 3

    last = await client.get("/api/v1/pets", params={"page": 3, "limit": 2})
    assert [item["name"] for item in last.json()["data"]] == ["Pet 0"]

    invalid = await client.get("/api/v1/pets", params={"page": 0})
    assert invalid.status_code == 400


async def test_get_update_delete_pet(app_context: dict[str, Any], db_url: str) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _auth_headers(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    (pet_id,) = await _seed_pets(db_url, [{"name": "Biscuit", "color": "brown"}])

    fetched = await client.get(f"/api/v1/pets/{pet_id}")
    assert fetched.status_code == 200
    assert fetched.json()["data"]["name"] == "Biscuit"

    updated = await client.put(
        f"/api/v1/pets/{pet_id}",
        json={"age": 7, "color": None, "status": "adopted"},
        headers=headers,
    )
    assert updated.status_code == 200
    data = updated.json()["data"]
    assert data["age"] == 7
    assert data["color"] is None
    assert data["status"] == "available"

    deleted = await client.delete(f"/api/v1/pets/{pet_id}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["data"] == {}

    missing = await client.get(f"/api/v1/pets/{pet_id}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Pet not found"

    missing_update = await client.put(
        f"/api/v1/pets/{uuid.uuid4()}", json={"age": 1}, headers=headers
    )
    assert missing_update.status_code == 404


async def test_status_override(app_context: dict[str, Any], db_url: str) -> None:
    client: AsyncClient = app_context["client"]
    headers = await _auth_headers(
        client, app_context["admin_email"], app_context["admin_password"]
    )
    (pet_id,) = await _seed_pets(db_url, [{}])

    response = await client.patch(
        f"/api/v1/pets/{pet_id}/status", json={"status": "Adopted"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "adopted"

    invalid = await client.patch(
        f"/api/v1/pets/{pet_id}/status", json={"status": "lost"}, headers=headers
    )
    assert invalid.status_code == 400

    missing = await client.patch(
        f"/api/v1/pets/{uuid.uuid4()}/status",
        json={"status": "available"},
        headers=headers,
    )
    assert missing.status_code == 404
