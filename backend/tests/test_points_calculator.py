"""Tests for the weekly points rule and week boundaries."""

from datetime import date

import pytest

from app.core.weeks import previous_week_start, week_end_for, week_start_for
from app.services.points_calculator import (
    calculate_weekly_points,
    is_award_boundary,
    points_for_session_count,
)
from app.services.users import create_user
from app.services.workout_sessions import create_workout_session

MONDAY = date(2026, 10, 12)
SUNDAY = date(2026, 10, 18)


@pytest.mark.parametrize("count,expected", [
    (0, 0),
    (1, 0),
    (2, 0),
    (3, 1),
    (5, 1),
    (6, 2),
    (9, 3),
    (-1, 0),
])
def test_points_for_session_count(count, expected):
    """One point per 3 sessions, no partial credit."""
    assert points_for_session_count(count) == expected


def test_points_for_session_count_custom_rate():
    assert points_for_session_count(4, sessions_per_point=2) == 2


@pytest.mark.parametrize("count,expected", [(0, False), (2, False), (3, True), (4, False), (6, True)])
def test_is_award_boundary(count, expected):
    assert is_award_boundary(count) is expected


@pytest.mark.parametrize("day", [MONDAY, date(2026, 10, 15), SUNDAY])
def test_week_start_is_monday(day):
    assert week_start_for(day) == MONDAY


def test_week_end_and_previous_week():
    assert week_end_for(MONDAY) == SUNDAY
    assert previous_week_start(date(2026, 10, 19)) == MONDAY


@pytest.mark.asyncio
async def test_calculate_weekly_points_counts_monday_to_sunday_inclusive(repos, user):
    """Sessions on Monday and Sunday count; the Sunday before and the Monday after do not."""
    for day in (MONDAY, date(2026, 10, 14), SUNDAY, date(2026, 10, 11), date(2026, 10, 19)):
        await create_workout_session(repos, user.id, "running", day, 30)
    assert await calculate_weekly_points(repos.sessions, user.id, MONDAY) == 1


@pytest.mark.asyncio
async def test_calculate_weekly_points_ignores_other_users(repos, user):
    other = await create_user(repos, "Sam", "sam@example.com")
    for _ in range(3):
        await create_workout_session(repos, other.id, "gym", MONDAY, 45)
    assert await calculate_weekly_points(repos.sessions, user.id, MONDAY) == 0
    assert await calculate_weekly_points(repos.sessions, other.id, MONDAY) == 1
