"""Goals API: user-defined points targets, optionally paying out a reward."""

from fastapi import APIRouter

from app.api.deps import Repos
from app.core.validation import UNSET
from app.models.goal import Goal
from app.schemas.goal import GoalCreate, GoalResponse, GoalUpdate
from app.services.goals import create_goal, get_goal, list_goals, reset_goal, update_goal

router = APIRouter(tags=["goals"])


def goal_to_response(goal: Goal) -> dict:
    return {
        "id": goal.id,
        "user_id": goal.user_id,
        "name": goal.name,
        "description": goal.description,
        "points_required": goal.points_required,
        "points_accumulated": goal.points_accumulated,
        "completed": goal.completed,
        "reward_id": goal.reward_id,
        "created_at": goal.created_at,
        "updated_at": goal.updated_at,
    }


@router.post(
    "/users/{user_id}/goals",
    response_model=GoalResponse,
    status_code=201,
    summary="Create goal",
    responses={404: {"description": "User or reward not found"}},
)
async def create_goal_endpoint(repos: Repos, user_id: str, body: GoalCreate) -> dict:
    goal = await create_goal(
        repos,
        user_id,
        body.name,
        body.points_required,
        description=body.description,
        reward_id=body.reward_id,
    )
    return goal_to_response(goal)


@router.get("/users/{user_id}/goals", response_model=list[GoalResponse], summary="List goals")
async def list_goals_endpoint(repos: Repos, user_id: str, completed: bool | None = None) -> list[dict]:
    """All goals of the user; ?completed=true|false filters."""
    return [goal_to_response(g) for g in await list_goals(repos, user_id, completed=completed)]


@router.get("/goals/{goal_id}", response_model=GoalResponse, summary="Get goal")
async def get_goal_endpoint(repos: Repos, goal_id: str) -> dict:
    return goal_to_response(await get_goal(repos, goal_id))


@router.patch("/goals/{goal_id}", response_model=GoalResponse, summary="Update goal")
async def update_goal_endpoint(repos: Repos, goal_id: str, body: GoalUpdate) -> dict:
    """`"reward_id": null` unlinks the reward; omitted fields are left unchanged."""
    sent = body.model_fields_set
    goal = await update_goal(
        repos,
        goal_id,
        name=body.name,
        points_required=body.points_required,
        description=body.description if "description" in sent else UNSET,
        reward_id=body.reward_id if "reward_id" in sent else UNSET,
    )
    return goal_to_response(goal)


@router.post(
    "/goals/{goal_id}/reset",
    response_model=GoalResponse,
    summary="Reset goal progress",
    responses={404: {"description": "Goal not found"}},
)
async def reset_goal_endpoint(repos: Repos, goal_id: str) -> dict:
    """Back to 0 points and not completed. Rewards already unlocked are kept."""
    return goal_to_response(await reset_goal(repos, goal_id))
