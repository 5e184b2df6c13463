"""Tests for programs API and exercise editing."""

import pytest
from httpx import AsyncClient

SQUAT = {"name": "Squat", "sets": 5, "reps": 5, "weight": 80.0}
PLANK = {"name": "Plank", "sets": 3, "reps": 1, "duration": 1}


async def _program(client, user_id, **overrides):
    body = {"name": "Strength A", "type": "gym", "exercises": [SQUAT], **overrides}
    return await client.post(f"/api/v1/users/{user_id}/programs", json=body)


@pytest.mark.asyncio
async def test_create_program(client: AsyncClient, user):
    resp = await _program(client, user.id, description="Full body")
    assert resp.status_code == 201
    data = resp.json()
    assert data["type"] == "gym"
    assert data["exercises"][0]["name"] == "Squat"
    assert data["exercises"][0]["weight"] == 80.0


@pytest.mark.asyncio
async def test_create_program_duplicate_exercise_names(client: AsyncClient, user):
    resp = await _program(client, user.id, exercises=[SQUAT, SQUAT])
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_program_invalid_sets(client: AsyncClient, user):
    resp = await _program(client, user.id, exercises=[{**SQUAT, "sets": 0}])
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_programs_by_type(client: AsyncClient, user):
    await _program(client, user.id)
    await _program(client, user.id, name="Flow", type="yoga", exercises=[])
    resp = await client.get(f"/api/v1/users/{user.id}/programs?type=yoga")
    assert [p["name"] for p in resp.json()] == ["Flow"]
    resp = await client.get(f"/api/v1/users/{user.id}/programs")
    assert len(resp.json()) == 2


@pytest.mark.asyncio
async def test_exercise_add_update_remove(client: AsyncClient, user):
    program_id = (await _program(client, user.id)).json()["id"]

    resp = await client.post(f"/api/v1/programs/{program_id}/exercises", json=PLANK)
    assert resp.status_code == 201
    assert [e["name"] for e in resp.json()["exercises"]] == ["Squat", "Plank"]

    resp = await client.post(f"/api/v1/programs/{program_id}/exercises", json=PLANK)
    assert resp.status_code == 422

    resp = await client.patch(f"/api/v1/programs/{program_id}/exercises/Squat", json={"reps": 3})
    assert resp.status_code == 200
    squat = resp.json()["exercises"][0]
    assert squat["reps"] == 3
    assert squat["sets"] == 5
    assert squat["weight"] == 80.0

    resp = await client.delete(f"/api/v1/programs/{program_id}/exercises/Squat")
    assert [e["name"] for e in resp.json()["exercises"]] == ["Plank"]

    resp = await client.delete(f"/api/v1/programs/{program_id}/exercises/Squat")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_update_and_delete_program(client: AsyncClient, user):
    program_id = (await _program(client, user.id)).json()["id"]
    resp = await client.patch(f"/api/v1/programs/{program_id}", json={"name": "Strength B", "exercises": [PLANK]})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Strength B"
    assert [e["name"] for e in resp.json()["exercises"]] == ["Plank"]

    assert (await client.delete(f"/api/v1/programs/{program_id}")).status_code == 204
    assert (await client.get(f"/api/v1/programs/{program_id}")).status_code == 404


@pytest.mark.asyncio
async def test_delete_program_detaches_sessions(client: AsyncClient, user):
    program_id = (await _program(client, user.id)).json()["id"]
    logged = await client.post(
        f"/api/v1/users/{user.id}/sessions",
        json={"type": "gym", "date": "2026-10-12", "duration": 60, "program_id": program_id},
    )
    session_id = logged.json()["session"]["id"]

    assert (await client.delete(f"/api/v1/programs/{program_id}")).status_code == 204
    resp = await client.get(f"/api/v1/sessions/{session_id}")
    assert resp.status_code == 200
    assert resp.json()["program_id"] is None
