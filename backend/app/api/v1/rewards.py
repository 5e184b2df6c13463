"""Rewards API: catalogue administration and per-user unlocks."""

from fastapi import APIRouter

from app.api.deps import Repos
from app.models.reward import Reward
from app.models.user_reward import UserReward
from app.schemas.reward import (
    RewardCreate,
    RewardResponse,
    RewardUnlockOutcomeResponse,
    RewardUpdate,
    UserRewardResponse,
)
from app.services.reward_unlock import (
    RewardUnlockOutcome,
    get_unlocked_rewards,
    get_user_rewards,
    unlock_affordable_rewards,
    unlock_reward,
)
from app.services.rewards import (
    create_reward,
    get_reward,
    initialize_predefined_rewards,
    list_rewards,
    update_reward,
)

router = APIRouter(tags=["rewards"])


def reward_to_response(reward: Reward) -> dict:
    return {
        "id": reward.id,
        "name": reward.name,
        "description": reward.description,
        "tier": reward.tier,
        "points_cost": reward.points_cost,
        "image_url": reward.image_url,
        "created_at": reward.created_at,
        "updated_at": reward.updated_at,
    }


def user_reward_to_response(user_reward: UserReward) -> dict:
    return {
        "id": user_reward.id,
        "user_id": user_reward.user_id,
        "reward_id": user_reward.reward_id,
        "unlocked": user_reward.unlocked,
        "unlocked_at": user_reward.unlocked_at,
    }


def outcome_to_response(outcome: RewardUnlockOutcome) -> dict:
    return {
        "reward_id": outcome.reward_id,
        "reward_name": outcome.reward_name,
        "points_cost": outcome.points_cost,
        "unlocked": outcome.unlocked,
        "error": outcome.error,
    }


@router.post("/rewards", response_model=RewardResponse, status_code=201, summary="Create reward")
async def create_reward_endpoint(repos: Repos, body: RewardCreate) -> dict:
    reward = await create_reward(
        repos,
        body.name,
        body.tier,
        body.points_cost,
        description=body.description,
        image_url=body.image_url,
    )
    return reward_to_response(reward)


@router.get("/rewards", response_model=list[RewardResponse], summary="List rewards")
async def list_rewards_endpoint(
    repos: Repos,
    tier: int | None = None,
    min_points: int | None = None,
    max_points: int | None = None,
) -> list[dict]:
    """Catalogue sorted by cost; optional tier or cost-range filter."""
    rewards = await list_rewards(repos, tier=tier, min_points=min_points, max_points=max_points)
    return [reward_to_response(r) for r in rewards]


@router.post(
    "/rewards/predefined",
    response_model=list[RewardResponse],
    summary="Create the predefined five-tier rewards (idempotent)",
)
async def init_predefined_rewards_endpoint(repos: Repos) -> list[dict]:
    return [reward_to_response(r) for r in await initialize_predefined_rewards(repos)]


@router.get("/rewards/{reward_id}", response_model=RewardResponse, summary="Get reward")
async def get_reward_endpoint(repos: Repos, reward_id: str) -> dict:
    return reward_to_response(await get_reward(repos, reward_id))


@router.patch("/rewards/{reward_id}", response_model=RewardResponse, summary="Update reward")
async def update_reward_endpoint(repos: Repos, reward_id: str, body: RewardUpdate) -> dict:
    reward = await update_reward(
        repos,
        reward_id,
        name=body.name,
        description=body.description,
        tier=body.tier,
        points_cost=body.points_cost,
        image_url=body.image_url,
    )
    return reward_to_response(reward)


@router.get(
    "/users/{user_id}/rewards",
    response_model=list[UserRewardResponse],
    summary="User reward rows (locked and unlocked)",
)
async def list_user_rewards_endpoint(repos: Repos, user_id: str) -> list[dict]:
    return [user_reward_to_response(ur) for ur in await get_user_rewards(repos, user_id)]


@router.get(
    "/users/{user_id}/rewards/unlocked",
    response_model=list[RewardResponse],
    summary="Rewards unlocked by the user",
)
async def list_unlocked_rewards_endpoint(repos: Repos, user_id: str) -> list[dict]:
    return [reward_to_response(r) for r in await get_unlocked_rewards(repos, user_id)]


@router.post(
    "/users/{user_id}/rewards/{reward_id}/unlock",
    response_model=UserRewardResponse,
    summary="Unlock a reward by spending points",
    responses={
        404: {"description": "User or reward not found"},
        409: {"description": "Not enough points (body carries required/available)"},
    },
)
async def unlock_reward_endpoint(repos: Repos, user_id: str, reward_id: str) -> dict:
    """Idempotent: unlocking an already unlocked reward returns it without spending points."""
    return user_reward_to_response(await unlock_reward(repos, user_id, reward_id))


@router.post(
    "/users/{user_id}/rewards/sweep",
    response_model=list[RewardUnlockOutcomeResponse],
    summary="Unlock every reward the user can currently afford",
)
async def sweep_rewards_endpoint(repos: Repos, user_id: str) -> list[dict]:
    return [outcome_to_response(o) for o in await unlock_affordable_rewards(repos, user_id)]
