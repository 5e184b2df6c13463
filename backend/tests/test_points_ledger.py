"""Tests for the points ledger: idempotent weekly award per (user, week)."""

from datetime import date

import pytest

from app.core.errors import InsufficientPointsError, NotFoundError, ValidationError
from app.services.points_ledger import apply_points_delta, award_points_for_week
from app.services.workout_sessions import create_workout_session, delete_workout_session

MONDAY = date(2026, 10, 12)


async def _log(repos, user_id, n, day=MONDAY):
    return [await create_workout_session(repos, user_id, "crossfit", day, 60) for _ in range(n)]


@pytest.mark.asyncio
async def test_award_credits_week_points(repos, user):
    await _log(repos, user.id, 3)
    updated = await award_points_for_week(repos, user.id, MONDAY)
    assert updated.points == 1
    award = await repos.weekly_awards.get_for_week(user.id, MONDAY)
    assert award.points_awarded == 1


@pytest.mark.asyncio
async def test_award_is_idempotent_for_unchanged_week(repos, user):
    """Calling the award twice for the same week credits nothing the second time."""
    await _log(repos, user.id, 3)
    await award_points_for_week(repos, user.id, MONDAY)
    updated = await award_points_for_week(repos, user.id, MONDAY)
    assert updated.points == 1


@pytest.mark.asyncio
async def test_sixth_session_credits_only_the_difference(repos, user):
    await _log(repos, user.id, 3)
    await award_points_for_week(repos, user.id, MONDAY)
    await _log(repos, user.id, 3)
    updated = await award_points_for_week(repos, user.id, MONDAY)
    assert updated.points == 2
    assert (await repos.weekly_awards.get_for_week(user.id, MONDAY)).points_awarded == 2


@pytest.mark.asyncio
async def test_non_monday_week_start_is_normalised(repos, user):
    await _log(repos, user.id, 3)
    await award_points_for_week(repos, user.id, date(2026, 10, 16))
    assert await repos.weekly_awards.get_for_week(user.id, MONDAY) is not None
    updated = await award_points_for_week(repos, user.id, MONDAY)
    assert updated.points == 1


@pytest.mark.asyncio
async def test_deleted_sessions_do_not_claw_back_points(repos, user):
    """Points stay after sessions are removed; re-adding them does not pay twice."""
    sessions = await _log(repos, user.id, 3)
    await award_points_for_week(repos, user.id, MONDAY)
    await delete_workout_session(repos, sessions[0].id)

    updated = await award_points_for_week(repos, user.id, MONDAY)
    assert updated.points == 1

    await _log(repos, user.id, 1)
    updated = await award_points_for_week(repos, user.id, MONDAY)
    assert updated.points == 1


@pytest.mark.asyncio
async def test_award_below_threshold_writes_no_marker(repos, user):
    await _log(repos, user.id, 2)
    updated = await award_points_for_week(repos, user.id, MONDAY)
    assert updated.points == 0
    assert await repos.weekly_awards.get_for_week(user.id, MONDAY) is None


@pytest.mark.asyncio
async def test_award_unknown_user_raises(repos):
    with pytest.raises(NotFoundError):
        await award_points_for_week(repos, "missing", MONDAY)


@pytest.mark.asyncio
async def test_apply_points_delta_never_goes_negative(user):
    apply_points_delta(user, 2)
    with pytest.raises(InsufficientPointsError) as exc_info:
        apply_points_delta(user, -3)
    assert exc_info.value.required == 3
    assert exc_info.value.available == 2
    assert user.points == 2


@pytest.mark.asyncio
async def test_add_and_use_points_reject_negative_amounts(user):
    with pytest.raises(ValidationError):
        user.add_points(-1)
    with pytest.raises(ValidationError):
        user.use_points(-1)
