"""Points API: award a week's points on demand, push points into goals."""

from fastapi import APIRouter

from app.api.deps import Repos
from app.api.v1.goals import goal_to_response
from app.api.v1.rewards import outcome_to_response
from app.core.weeks import week_start_for
from app.schemas.goal import GoalResponse
from app.schemas.points import GoalsProgressBody, WeeklyPointsBody, WeeklyPointsResponse
from app.services.orchestrator import settle_week, update_goals_progress

router = APIRouter(prefix="/users/{user_id}/points", tags=["points"])


@router.post(
    "/weekly",
    response_model=WeeklyPointsResponse,
    summary="Award outstanding points for a week",
    responses={404: {"description": "User not found"}},
)
async def award_weekly_points(repos: Repos, user_id: str, body: WeeklyPointsBody) -> dict:
    """
    Idempotent: only points not yet granted for that week are credited,
    so calling it twice for an unchanged week earns nothing the second time.
    """
    week_start = week_start_for(body.week_start)
    update = await settle_week(repos, user_id, week_start)
    return {
        "week_start": week_start,
        "points_earned": update.points_earned,
        "user_points": update.user_points,
        "goals": [goal_to_response(g) for g in update.goals],
        "unlocks": [outcome_to_response(o) for o in update.unlocks],
    }


@router.post(
    "/goals",
    response_model=list[GoalResponse],
    summary="Add points to every open goal",
)
async def add_points_to_goals(repos: Repos, user_id: str, body: GoalsProgressBody) -> list[dict]:
    """Non-positive points_earned is a no-op (empty list)."""
    goals = await update_goals_progress(repos, user_id, body.points_earned)
    return [goal_to_response(g) for g in goals]
