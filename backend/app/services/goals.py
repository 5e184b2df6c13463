"""Goal management: create, edit, list and reset user goals."""

from app.core.errors import NotFoundError
from app.core.ids import IdGenerator, utcnow, uuid_id
from app.core.validation import UNSET, optional_text, require_positive, require_text
from app.models.goal import Goal
from app.repositories.base import Repositories
from app.services.goal_progress import reset_goal_progress


async def _ensure_reward(repos: Repositories, reward_id: str) -> None:
    if await repos.rewards.get_by_id(reward_id) is None:
        raise NotFoundError("Reward", reward_id)


async def create_goal(
    repos: Repositories,
    user_id: str,
    name: str,
    points_required: int,
    description: str | None = None,
    reward_id: str | None = None,
    *,
    id_generator: IdGenerator = uuid_id,
) -> Goal:
    name = require_text(name, "name")
    require_positive(points_required, "points_required")
    if await repos.users.get_by_id(user_id) is None:
        raise NotFoundError("User", user_id)
    if reward_id:
        await _ensure_reward(repos, reward_id)
    now = utcnow()
    goal = Goal(
        id=id_generator(),
        user_id=user_id,
        name=name,
        description=optional_text(description),
        points_required=points_required,
        points_accumulated=0,
        completed=False,
        reward_id=reward_id or None,
        created_at=now,
        updated_at=now,
    )
    return await repos.goals.add(goal)


async def get_goal(repos: Repositories, goal_id: str) -> Goal:
    goal = await repos.goals.get_by_id(goal_id)
    if goal is None:
        raise NotFoundError("Goal", goal_id)
    return goal


async def update_goal(
    repos: Repositories,
    goal_id: str,
    *,
    name: str | None = None,
    points_required: int | None = None,
    description: str | None = UNSET,
    reward_id: str | None = UNSET,
) -> Goal:
    """Partial update; description and reward_id are cleared by an explicit None."""
    goal = await get_goal(repos, goal_id)
    if name is not None:
        name = require_text(name, "name")
    if points_required is not None:
        require_positive(points_required, "points_required")
    if description is not UNSET:
        description = optional_text(description)
    if reward_id is not UNSET:
        reward_id = reward_id or None
        if reward_id is not None:
            await _ensure_reward(repos, reward_id)
    goal.update_details(name, points_required, description, reward_id)
    return await repos.goals.save(goal)


async def list_goals(repos: Repositories, user_id: str, *, completed: bool | None = None) -> list[Goal]:
    if completed is True:
        return await repos.goals.list_completed_by_user(user_id)
    if completed is False:
        return await repos.goals.list_incomplete_by_user(user_id)
    return await repos.goals.list_by_user(user_id)


async def reset_goal(repos: Repositories, goal_id: str) -> Goal:
    """Explicit user action only; the scoring path never resets goals."""
    goal = await get_goal(repos, goal_id)
    reset_goal_progress(goal)
    return await repos.goals.save(goal)
