"""Tests for rewards API: catalogue, manual unlock, sweep."""

import pytest
from httpx import AsyncClient

from app.services.rewards import PREDEFINED_REWARDS


async def _give(repos, user, points):
    user.add_points(points)
    await repos.users.save(user)


@pytest.mark.asyncio
async def test_create_and_get_reward(client: AsyncClient):
    resp = await client.post(
        "/api/v1/rewards",
        json={"name": "Smoothie", "tier": 1, "points_cost": 1, "description": "Post-workout treat"},
    )
    assert resp.status_code == 201
    reward_id = resp.json()["id"]
    resp = await client.get(f"/api/v1/rewards/{reward_id}")
    assert resp.status_code == 200
    assert resp.json()["description"] == "Post-workout treat"


@pytest.mark.parametrize("body", [
    {"name": "Bad tier", "tier": 6, "points_cost": 1},
    {"name": "Free", "tier": 1, "points_cost": 0},
    {"name": "", "tier": 1, "points_cost": 1},
])
@pytest.mark.asyncio
async def test_create_reward_invalid(client: AsyncClient, body):
    resp = await client.post("/api/v1/rewards", json=body)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_rewards_filters(client: AsyncClient, rewards):
    resp = await client.get("/api/v1/rewards")
    assert [r["points_cost"] for r in resp.json()] == [1, 2, 5]
    resp = await client.get("/api/v1/rewards?tier=2")
    assert [r["name"] for r in resp.json()] == ["Massage"]
    resp = await client.get("/api/v1/rewards?min_points=2&max_points=5")
    assert [r["points_cost"] for r in resp.json()] == [2, 5]


@pytest.mark.asyncio
async def test_update_reward(client: AsyncClient, rewards):
    resp = await client.patch(f"/api/v1/rewards/{rewards[0].id}", json={"points_cost": 3})
    assert resp.status_code == 200
    assert resp.json()["points_cost"] == 3
    assert resp.json()["name"] == "Playlist"


@pytest.mark.asyncio
async def test_predefined_rewards_are_created_once(client: AsyncClient):
    first = await client.post("/api/v1/rewards/predefined")
    second = await client.post("/api/v1/rewards/predefined")
    assert first.status_code == 200
    assert [r["id"] for r in first.json()] == [r["id"] for r in second.json()]
    assert [r["tier"] for r in first.json()] == [1, 2, 3, 4, 5]
    assert len((await client.get("/api/v1/rewards")).json()) == len(PREDEFINED_REWARDS)


@pytest.mark.asyncio
async def test_unlock_with_insufficient_points(client: AsyncClient, user, rewards):
    resp = await client.post(f"/api/v1/users/{user.id}/rewards/{rewards[2].id}/unlock")
    assert resp.status_code == 409
    data = resp.json()
    assert data["required"] == 5
    assert data["available"] == 0
    assert "Not enough points" in data["detail"]


@pytest.mark.asyncio
async def test_unlock_and_list(client: AsyncClient, repos, user, rewards):
    await _give(repos, user, 2)
    resp = await client.post(f"/api/v1/users/{user.id}/rewards/{rewards[1].id}/unlock")
    assert resp.status_code == 200
    assert resp.json()["unlocked"] is True

    again = await client.post(f"/api/v1/users/{user.id}/rewards/{rewards[1].id}/unlock")
    assert again.status_code == 200
    assert (await client.get(f"/api/v1/users/{user.id}")).json()["points"] == 0

    unlocked = await client.get(f"/api/v1/users/{user.id}/rewards/unlocked")
    assert [r["id"] for r in unlocked.json()] == [rewards[1].id]
    rows = await client.get(f"/api/v1/users/{user.id}/rewards")
    assert len(rows.json()) == 1


@pytest.mark.asyncio
async def test_unlock_unknown_reward(client: AsyncClient, user):
    resp = await client.post(f"/api/v1/users/{user.id}/rewards/missing/unlock")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_sweep(client: AsyncClient, repos, user, rewards):
    await _give(repos, user, 3)
    resp = await client.post(f"/api/v1/users/{user.id}/rewards/sweep")
    assert resp.status_code == 200
    assert [(o["reward_name"], o["unlocked"]) for o in resp.json()] == [("Playlist", True), ("Massage", True)]
