"""Pydantic schemas for the reward catalogue and per-user unlock state."""

from datetime import datetime

from pydantic import BaseModel, Field


class RewardCreate(BaseModel):
    name: str
    description: str = ""
    tier: int = Field(..., description="1 (cheapest) to 5")
    points_cost: int
    image_url: str | None = None


class RewardUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    tier: int | None = None
    points_cost: int | None = None
    image_url: str | None = None


class RewardResponse(BaseModel):
    id: str
    name: str
    description: str
    tier: int
    points_cost: int
    image_url: str | None
    created_at: datetime | None
    updated_at: datetime | None


class UserRewardResponse(BaseModel):
    id: str
    user_id: str
    reward_id: str
    unlocked: bool
    unlocked_at: datetime | None


class RewardUnlockOutcomeResponse(BaseModel):
    """One attempt of the automatic unlock sweep."""

    reward_id: str
    reward_name: str
    points_cost: int
    unlocked: bool
    error: str | None = None
