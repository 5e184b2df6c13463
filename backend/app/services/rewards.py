"""Reward catalogue: administrative create/update, lookups and the predefined five-tier set."""

import logging

from app.core.errors import NotFoundError, ValidationError
from app.core.ids import IdGenerator, utcnow, uuid_id
from app.core.validation import optional_text, require_positive, require_text
from app.models.reward import MAX_TIER, MIN_TIER, Reward
from app.repositories.base import Repositories

logger = logging.getLogger(__name__)

# Seeded on startup when settings.seed_predefined_rewards is set (matched by name, never duplicated).
PREDEFINED_REWARDS: list[dict] = [
    {
        "name": "Exclusive Workout Playlist",
        "description": "Access to an exclusive playlist of motivating music for your workouts.",
        "tier": 1,
        "points_cost": 1,
        "image_url": "/images/rewards/playlist.jpg",
    },
    {
        "name": "30-Minute Relaxing Massage",
        "description": "A relaxing 30-minute massage to recover after training.",
        "tier": 2,
        "points_cost": 2,
        "image_url": "/images/rewards/massage.jpg",
    },
    {
        "name": "Fine Dining Dinner",
        "description": "A meal at a gastronomic restaurant to celebrate your progress.",
        "tier": 3,
        "points_cost": 5,
        "image_url": "/images/rewards/restaurant.jpg",
    },
    {
        "name": "Surprise Weekend Getaway",
        "description": "A surprise weekend away to relax and recharge.",
        "tier": 4,
        "points_cost": 10,
        "image_url": "/images/rewards/weekend.jpg",
    },
    {
        "name": "Exotic Holiday",
        "description": "A holiday somewhere exotic as the ultimate reward for your dedication.",
        "tier": 5,
        "points_cost": 15,
        "image_url": "/images/rewards/vacation.jpg",
    },
]


def _check_tier(tier: int) -> int:
    if not MIN_TIER <= tier <= MAX_TIER:
        raise ValidationError(f"tier must be between {MIN_TIER} and {MAX_TIER} (got {tier})")
    return tier


async def create_reward(
    repos: Repositories,
    name: str,
    tier: int,
    points_cost: int,
    description: str = "",
    image_url: str | None = None,
    *,
    id_generator: IdGenerator = uuid_id,
) -> Reward:
    now = utcnow()
    reward = Reward(
        id=id_generator(),
        name=require_text(name, "name"),
        description=(description or "").strip(),
        tier=_check_tier(tier),
        points_cost=require_positive(points_cost, "points_cost"),
        image_url=optional_text(image_url),
        created_at=now,
        updated_at=now,
    )
    return await repos.rewards.add(reward)


async def get_reward(repos: Repositories, reward_id: str) -> Reward:
    reward = await repos.rewards.get_by_id(reward_id)
    if reward is None:
        raise NotFoundError("Reward", reward_id)
    return reward


async def update_reward(
    repos: Repositories,
    reward_id: str,
    *,
    name: str | None = None,
    description: str | None = None,
    tier: int | None = None,
    points_cost: int | None = None,
    image_url: str | None = None,
) -> Reward:
    """Administrative edit. Existing unlocks are not affected by a cost change."""
    reward = await get_reward(repos, reward_id)
    if name is not None:
        name = require_text(name, "name")
    if tier is not None:
        _check_tier(tier)
    if points_cost is not None:
        require_positive(points_cost, "points_cost")
    reward.update_details(name, description, tier, points_cost, image_url)
    return await repos.rewards.save(reward)


async def list_rewards(
    repos: Repositories,
    *,
    tier: int | None = None,
    min_points: int | None = None,
    max_points: int | None = None,
) -> list[Reward]:
    """Catalogue sorted by cost; filter by tier or by a cost range."""
    if tier is not None:
        return await repos.rewards.list_by_tier(_check_tier(tier))
    if min_points is not None or max_points is not None:
        return await repos.rewards.list_by_points_cost(min_points or 0, max_points)
    return await repos.rewards.list_all()


async def initialize_predefined_rewards(
    repos: Repositories,
    *,
    id_generator: IdGenerator = uuid_id,
) -> list[Reward]:
    """Create the predefined rewards that do not exist yet (by name). Safe to call repeatedly."""
    rewards: list[Reward] = []
    created = 0
    for data in PREDEFINED_REWARDS:
        existing = await repos.rewards.get_by_name(data["name"])
        if existing is not None:
            rewards.append(existing)
            continue
        rewards.append(await create_reward(repos, id_generator=id_generator, **data))
        created += 1
    if created:
        logger.info("Rewards: seeded %s predefined rewards", created)
    return rewards
