"""
Reward unlocking against the user's points balance.

A reward is unlocked at most once per user (one user_rewards row per pair,
unlocked is one-way) and never without enough points: the sufficiency check
and the deduction happen together in User.apply_points_delta.
"""

import logging
from dataclasses import dataclass

from app.core.errors import NotFoundError
from app.core.ids import IdGenerator, utcnow, uuid_id
from app.core.metrics import REWARD_UNLOCK_FAILURES, REWARDS_UNLOCKED
from app.models.reward import Reward
from app.models.user_reward import UserReward
from app.repositories.base import Repositories

logger = logging.getLogger(__name__)


@dataclass
class RewardUnlockOutcome:
    """Result of one attempt in the automatic sweep."""

    reward_id: str
    reward_name: str
    points_cost: int
    unlocked: bool
    error: str | None = None


async def unlock_reward(
    repos: Repositories,
    user_id: str,
    reward_id: str,
    *,
    id_generator: IdGenerator = uuid_id,
    source: str = "manual",
) -> UserReward:
    """
    Spend reward.points_cost and mark the reward unlocked for the user.
    Idempotent: an already unlocked reward is returned as is, nothing deducted.
    Raises NotFoundError (user/reward) or InsufficientPointsError.
    """
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    reward = await repos.rewards.get_by_id(reward_id)
    if reward is None:
        raise NotFoundError("Reward", reward_id)

    user_reward = await repos.user_rewards.get_by_user_and_reward(user_id, reward_id)
    is_new = user_reward is None
    now = utcnow()
    if is_new:
        user_reward = UserReward(
            id=id_generator(),
            user_id=user_id,
            reward_id=reward_id,
            unlocked=False,
            unlocked_at=None,
            created_at=now,
            updated_at=now,
        )

    if user_reward.unlocked:
        return user_reward

    user.use_points(reward.points_cost)
    user_reward.unlock(now)

    # Same transaction in SQL: both writes commit together or not at all.
    await repos.users.save(user)
    if is_new:
        await repos.user_rewards.add(user_reward)
    else:
        await repos.user_rewards.save(user_reward)

    REWARDS_UNLOCKED.labels(source=source).inc()
    logger.info(
        "Reward unlocked: user_id=%s reward_id=%s cost=%s balance=%s source=%s",
        user_id, reward_id, reward.points_cost, user.points, source,
    )
    return user_reward


async def get_user_rewards(repos: Repositories, user_id: str) -> list[UserReward]:
    """All user_rewards rows of the user, locked and unlocked."""
    return await repos.user_rewards.list_by_user(user_id)


async def get_unlocked_rewards(repos: Repositories, user_id: str) -> list[Reward]:
    """Rewards unlocked by the user. Rewards without a row are implicitly locked."""
    rewards: list[Reward] = []
    for reward_id in await repos.user_rewards.list_unlocked_reward_ids(user_id):
        reward = await repos.rewards.get_by_id(reward_id)
        if reward is not None:
            rewards.append(reward)
    rewards.sort(key=lambda r: r.points_cost)
    return rewards


async def unlock_affordable_rewards(
    repos: Repositories,
    user_id: str,
    *,
    id_generator: IdGenerator = uuid_id,
) -> list[RewardUnlockOutcome]:
    """
    Unlock every not-yet-unlocked reward the user can currently afford, cheapest first.
    Each attempt runs in its own savepoint; a failure is reported in the outcome and
    does not stop the remaining attempts.
    """
    if await repos.users.get_by_id(user_id) is None:
        raise NotFoundError("User", user_id)

    unlocked_ids = set(await repos.user_rewards.list_unlocked_reward_ids(user_id))
    outcomes: list[RewardUnlockOutcome] = []
    for reward in await repos.rewards.list_all():
        rid, name, cost = reward.id, reward.name, reward.points_cost
        if rid in unlocked_ids:
            continue
        user = await repos.users.get_by_id(user_id)
        if cost > user.points:
            # Sorted by cost: nothing further is affordable.
            break
        try:
            async with repos.savepoint():
                await unlock_reward(repos, user_id, rid, id_generator=id_generator, source="sweep")
        except Exception as e:
            REWARD_UNLOCK_FAILURES.inc()
            logger.warning("Reward sweep: user_id=%s reward_id=%s failed: %s", user_id, rid, e)
            outcomes.append(RewardUnlockOutcome(rid, name, cost, unlocked=False, error=str(e)))
            continue
        unlocked_ids.add(rid)
        outcomes.append(RewardUnlockOutcome(rid, name, cost, unlocked=True))
    return outcomes
