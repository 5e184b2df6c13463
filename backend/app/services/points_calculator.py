"""Weekly points rule: 1 point per `sessions_per_point` sessions logged in a Monday-Sunday week."""

from datetime import date

from app.config import settings
from app.core.weeks import week_end_for
from app.repositories.base import WorkoutSessionRepository


def points_for_session_count(session_count: int, sessions_per_point: int | None = None) -> int:
    """floor(count / per_point). No partial credit; never negative."""
    per_point = sessions_per_point or settings.sessions_per_point
    if session_count <= 0:
        return 0
    return session_count // per_point


def is_award_boundary(session_count: int, sessions_per_point: int | None = None) -> bool:
    """True when the count just reached a positive multiple of sessions_per_point."""
    per_point = sessions_per_point or settings.sessions_per_point
    return session_count > 0 and session_count % per_point == 0


async def calculate_weekly_points(
    sessions: WorkoutSessionRepository,
    user_id: str,
    week_start: date,
    *,
    sessions_per_point: int | None = None,
) -> int:
    """Points earned by user_id for week_start .. week_start + 6 days (inclusive). Read-only."""
    rows = await sessions.list_by_user_and_range(user_id, week_start, week_end_for(week_start))
    return points_for_session_count(len(rows), sessions_per_point)
