"""Tests for the session -> weekly points -> goals -> rewards flow."""

from datetime import date, timedelta

import pytest

from app.config import settings
from app.services.goals import create_goal, reset_goal
from app.services.orchestrator import (
    log_workout_session,
    settle_week,
    track_weekly_points,
    update_goals_progress,
)
from app.services.rewards import create_reward
from app.services.workout_sessions import create_workout_session

MONDAY = date(2026, 10, 12)


async def _log_many(repos, user_id, n, start=MONDAY, type_="running"):
    results = []
    for i in range(n):
        results.append(await log_workout_session(repos, user_id, type_, start + timedelta(days=i % 7), 60))
    return results


@pytest.mark.asyncio
async def test_third_session_in_week_earns_a_point(repos, user):
    results = await _log_many(repos, user.id, 3)
    assert [r.points.points_earned for r in results] == [0, 0, 1]
    assert results[-1].sessions_in_week == 3
    assert results[-1].points.user_points == 1
    assert user.points == 1


@pytest.mark.asyncio
async def test_sixth_session_adds_exactly_one_point(repos, user):
    results = await _log_many(repos, user.id, 6)
    assert [r.points.points_earned for r in results] == [0, 0, 1, 0, 0, 1]
    assert user.points == 2


@pytest.mark.asyncio
async def test_sessions_in_different_weeks_do_not_combine(repos, user):
    await log_workout_session(repos, user.id, "yoga", date(2026, 10, 17), 30)
    await log_workout_session(repos, user.id, "yoga", date(2026, 10, 18), 30)
    result = await log_workout_session(repos, user.id, "yoga", date(2026, 10, 19), 30)
    assert result.sessions_in_week == 1
    assert user.points == 0


@pytest.mark.asyncio
async def test_track_weekly_points_twice_is_a_no_op(repos, user):
    for _ in range(3):
        await create_workout_session(repos, user.id, "gym", MONDAY, 50)
    assert await track_weekly_points(repos, user.id, MONDAY) == 1
    assert await track_weekly_points(repos, user.id, MONDAY) == 0
    assert user.points == 1


@pytest.mark.asyncio
async def test_settle_week_picks_up_unawarded_sessions(repos, user):
    """Sessions stored without the live award (edited, back-dated) are paid at settlement."""
    for day in (MONDAY, MONDAY + timedelta(days=2), MONDAY + timedelta(days=6)):
        await create_workout_session(repos, user.id, "swimming", day, 40)
    update = await settle_week(repos, user.id, MONDAY + timedelta(days=3))
    assert update.points_earned == 1
    assert update.user_points == 1

    again = await settle_week(repos, user.id, MONDAY)
    assert again.points_earned == 0


@pytest.mark.asyncio
async def test_points_feed_open_goals(repos, user):
    goal = await create_goal(repos, user.id, "First point", 1)
    big = await create_goal(repos, user.id, "Ten points", 10)
    result = (await _log_many(repos, user.id, 3))[-1]
    assert {g.id for g in result.points.goals} == {goal.id, big.id}
    assert goal.completed is True
    assert big.points_accumulated == 1
    assert big.completed is False


@pytest.mark.asyncio
async def test_completed_goal_unlocks_its_reward_without_spending(repos, user):
    reward = await create_reward(repos, "Weekend away", 4, 10)
    await create_goal(repos, user.id, "First point", 1, reward_id=reward.id)
    await _log_many(repos, user.id, 3)

    row = await repos.user_rewards.get_by_user_and_reward(user.id, reward.id)
    assert row is not None
    assert row.unlocked is True
    assert user.points == 1


@pytest.mark.asyncio
async def test_completed_goal_without_row_when_creation_disabled(repos, user, monkeypatch):
    monkeypatch.setattr(settings, "goal_reward_creates_missing", False)
    reward = await create_reward(repos, "Weekend away", 4, 10)
    goal = await create_goal(repos, user.id, "First point", 1, reward_id=reward.id)
    await _log_many(repos, user.id, 3)

    assert goal.completed is True
    assert await repos.user_rewards.get_by_user_and_reward(user.id, reward.id) is None


@pytest.mark.asyncio
async def test_award_unlocks_affordable_rewards(repos, user, rewards):
    result = (await _log_many(repos, user.id, 3))[-1]
    assert [(o.reward_id, o.unlocked) for o in result.points.unlocks] == [(rewards[0].id, True)]
    assert result.points.user_points == 0


@pytest.mark.asyncio
async def test_auto_unlock_can_be_disabled(repos, user, rewards, monkeypatch):
    monkeypatch.setattr(settings, "auto_unlock_enabled", False)
    result = (await _log_many(repos, user.id, 3))[-1]
    assert result.points.unlocks == []
    assert user.points == 1


@pytest.mark.asyncio
async def test_update_goals_progress_ignores_non_positive_points(repos, user):
    goal = await create_goal(repos, user.id, "Goal", 5)
    assert await update_goals_progress(repos, user.id, 0) == []
    assert goal.points_accumulated == 0


@pytest.mark.asyncio
async def test_reset_goal_keeps_unlocked_reward(repos, user):
    reward = await create_reward(repos, "Weekend away", 4, 10)
    goal = await create_goal(repos, user.id, "First point", 1, reward_id=reward.id)
    await _log_many(repos, user.id, 3)

    await reset_goal(repos, goal.id)
    assert goal.points_accumulated == 0
    assert goal.completed is False
    row = await repos.user_rewards.get_by_user_and_reward(user.id, reward.id)
    assert row.unlocked is True
