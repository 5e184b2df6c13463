"""Tests for users API."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_user(client: AsyncClient):
    resp = await client.post("/api/v1/users", json={"name": "Jo", "email": "Jo@Example.com"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["email"] == "jo@example.com"
    assert data["points"] == 0

    resp = await client.get(f"/api/v1/users/{data['id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Jo"


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client: AsyncClient, user):
    resp = await client.post("/api/v1/users", json={"name": "Other", "email": "alex@example.com"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_user_empty_name(client: AsyncClient):
    resp = await client.post("/api/v1/users", json={"name": "  ", "email": "x@example.com"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_get_unknown_user(client: AsyncClient):
    resp = await client.get("/api/v1/users/missing")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "User with ID missing not found"


@pytest.mark.asyncio
async def test_list_users(client: AsyncClient, user):
    resp = await client.get("/api/v1/users")
    assert resp.status_code == 200
    assert [u["id"] for u in resp.json()] == [user.id]


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
