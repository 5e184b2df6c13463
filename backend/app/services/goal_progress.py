"""Goal progress: in-place state transitions on Goal, no I/O."""

from datetime import datetime

from app.models.goal import Goal
from app.models.user_reward import UserReward


def update_goal_progress(goal: Goal, points_added: int) -> Goal:
    """Add newly earned points. Completed goals are left untouched."""
    if goal.completed:
        return goal
    goal.add_points(points_added)
    return goal


def reset_goal_progress(goal: Goal) -> Goal:
    """Back to 0 points, not completed. Rewards already unlocked through the goal stay unlocked."""
    goal.reset()
    return goal


def check_goal_completion(goal: Goal) -> bool:
    return goal.is_completed()


def assign_reward_for_completed_goal(
    goal: Goal,
    user_rewards: list[UserReward],
    now: datetime | None = None,
) -> UserReward | None:
    """
    Unlock the user's existing row for the goal's reward.

    Returns None when the goal is not completed, has no reward, or the user has
    no row for that reward yet (creating one is up to the caller). An already
    unlocked row is returned unchanged.
    """
    if not goal.completed or not goal.reward_id:
        return None
    user_reward = next(
        (ur for ur in user_rewards if ur.reward_id == goal.reward_id and ur.user_id == goal.user_id),
        None,
    )
    if user_reward is None:
        return None
    if not user_reward.unlocked:
        user_reward.unlock(now)
    return user_reward
