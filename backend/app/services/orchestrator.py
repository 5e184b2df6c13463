"""
Points orchestrator: sequences "session added -> weekly award -> goals -> rewards".

Steps run strictly one after another: goal progress reads the balance delta
produced by the award, and the unlock sweep reads the balance left after goal
payouts. In SQL deployments all steps share the caller's transaction, so a
failure before commit leaves neither points nor unlocks half-applied; the
sweep isolates each reward in a savepoint.
"""
import logging
from dataclasses import dataclass, field
from datetime import date

from app.config import settings
from app.core.errors import NotFoundError
from app.core.ids import IdGenerator, utcnow, uuid_id
from app.core.metrics import REWARDS_UNLOCKED
from app.core.weeks import week_end_for, week_start_for
from app.models.goal import Goal
from app.models.user_reward import UserReward
from app.models.workout_session import WorkoutSession, WorkoutType
from app.repositories.base import Repositories
from app.services.goal_progress import assign_reward_for_completed_goal, update_goal_progress
from app.services.points_calculator import is_award_boundary
from app.services.points_ledger import award_points_for_week
from app.services.reward_unlock import RewardUnlockOutcome, unlock_affordable_rewards
from app.services.workout_sessions import create_workout_session

logger = logging.getLogger(__name__)


@dataclass
class PointsUpdate:
    """What one award pass changed for a user."""

    points_earned: int = 0
    user_points: int = 0
    goals: list[Goal] = field(default_factory=list)
    unlocks: list[RewardUnlockOutcome] = field(default_factory=list)


@dataclass
class SessionLogResult:
    session: WorkoutSession
    sessions_in_week: int
    points: PointsUpdate


async def _goal_reward_row(
    repos: Repositories,
    goal: Goal,
    user_rewards: list[UserReward],
    id_generator: IdGenerator,
) -> UserReward | None:
    """Existing row unlocked by assign_reward_for_completed_goal, or a new unlocked row (policy permitting)."""
    user_reward = assign_reward_for_completed_goal(goal, user_rewards)
    if user_reward is not None or not settings.goal_reward_creates_missing:
        return user_reward
    if await repos.rewards.get_by_id(goal.reward_id) is None:
        logger.warning("Goal %s completed but its reward_id=%s no longer exists", goal.id, goal.reward_id)
        return None
    now = utcnow()
    user_reward = UserReward(
        id=id_generator(),
        user_id=goal.user_id,
        reward_id=goal.reward_id,
        unlocked=True,
        unlocked_at=now,
        created_at=now,
        updated_at=now,
    )
    await repos.user_rewards.add(user_reward)
    user_rewards.append(user_reward)
    return user_reward


async def update_goals_progress(
    repos: Repositories,
    user_id: str,
    points_earned: int,
    *,
    id_generator: IdGenerator = uuid_id,
) -> list[Goal]:
    """
    Add points_earned to every incomplete goal of the user. Goals that complete
    and link a reward pay it out (no points are spent). Returns the updated goals.
    """
    if points_earned <= 0:
        return []

    goals = await repos.goals.list_incomplete_by_user(user_id)
    user_rewards = await repos.user_rewards.list_by_user(user_id)
    unlocked_before = {ur.reward_id for ur in user_rewards if ur.unlocked}

    updated: list[Goal] = []
    for goal in goals:
        update_goal_progress(goal, points_earned)
        if goal.completed and goal.reward_id:
            user_reward = await _goal_reward_row(repos, goal, user_rewards, id_generator)
            if user_reward is not None and user_reward.unlocked:
                await repos.user_rewards.save(user_reward)
                if user_reward.reward_id not in unlocked_before:
                    unlocked_before.add(user_reward.reward_id)
                    REWARDS_UNLOCKED.labels(source="goal").inc()
                    logger.info(
                        "Goal completed: user_id=%s goal_id=%s unlocked reward_id=%s",
                        user_id, goal.id, user_reward.reward_id,
                    )
        await repos.goals.save(goal)
        updated.append(goal)
    return updated


async def _award_week(
    repos: Repositories,
    user_id: str,
    week_start: date,
    id_generator: IdGenerator,
) -> PointsUpdate:
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    points_before = user.points

    user = await award_points_for_week(repos, user_id, week_start, id_generator=id_generator)
    update = PointsUpdate(points_earned=user.points - points_before)
    if update.points_earned > 0:
        update.goals = await update_goals_progress(
            repos, user_id, update.points_earned, id_generator=id_generator
        )
        if settings.auto_unlock_enabled:
            update.unlocks = await unlock_affordable_rewards(repos, user_id, id_generator=id_generator)
    update.user_points = (await repos.users.get_by_id(user_id)).points
    return update


async def track_weekly_points(
    repos: Repositories,
    user_id: str,
    week_start: date,
    *,
    id_generator: IdGenerator = uuid_id,
) -> int:
    """Award the week's outstanding points, progress goals, and return the points earned now."""
    update = await _award_week(repos, user_id, week_start, id_generator)
    return update.points_earned


async def settle_week(
    repos: Repositories,
    user_id: str,
    week_start: date,
    *,
    id_generator: IdGenerator = uuid_id,
) -> PointsUpdate:
    """
    Re-run the award for a (usually past) week regardless of the session count
    boundary. Idempotent thanks to the weekly award marker; picks up sessions
    edited or back-dated after the live award.
    """
    return await _award_week(repos, user_id, week_start_for(week_start), id_generator)


async def log_workout_session(
    repos: Repositories,
    user_id: str,
    type_: str | WorkoutType,
    date_: date,
    duration: int,
    program_id: str | None = None,
    notes: str | None = None,
    *,
    id_generator: IdGenerator = uuid_id,
) -> SessionLogResult:
    """
    Persist a session, then award the week's points when the session count for
    that Monday-Sunday week hits a positive multiple of sessions_per_point.
    """
    session = await create_workout_session(
        repos, user_id, type_, date_, duration, program_id, notes, id_generator=id_generator
    )
    week_start = week_start_for(session.date)
    in_week = await repos.sessions.list_by_user_and_range(user_id, week_start, week_end_for(week_start))
    count = len(in_week)

    if is_award_boundary(count):
        logger.debug("Session boundary: user_id=%s week=%s sessions=%s", user_id, week_start, count)
        points = await _award_week(repos, user_id, week_start, id_generator)
    else:
        user = await repos.users.get_by_id(user_id)
        points = PointsUpdate(user_points=user.points)
    return SessionLogResult(session=session, sessions_in_week=count, points=points)
