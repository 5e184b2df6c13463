"""Tests for points API: on-demand weekly award."""

from datetime import date

import pytest
from httpx import AsyncClient

from app.services.workout_sessions import create_workout_session


@pytest.mark.asyncio
async def test_weekly_award_is_idempotent(client: AsyncClient, repos, user):
    for day in ("2026-10-12", "2026-10-13", "2026-10-14"):
        await create_workout_session(repos, user.id, "pilates", date.fromisoformat(day), 50)

    resp = await client.post(f"/api/v1/users/{user.id}/points/weekly", json={"week_start": "2026-10-15"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["week_start"] == "2026-10-12"
    assert data["points_earned"] == 1
    assert data["user_points"] == 1

    resp = await client.post(f"/api/v1/users/{user.id}/points/weekly", json={"week_start": "2026-10-12"})
    assert resp.json()["points_earned"] == 0
    assert resp.json()["user_points"] == 1


@pytest.mark.asyncio
async def test_weekly_award_unknown_user(client: AsyncClient):
    resp = await client.post("/api/v1/users/missing/points/weekly", json={"week_start": "2026-10-12"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_goal_points_zero_is_noop(client: AsyncClient, user):
    resp = await client.post(f"/api/v1/users/{user.id}/points/goals", json={"points_earned": 0})
    assert resp.status_code == 200
    assert resp.json() == []
