"""Pydantic schemas for weekly points and goal progress endpoints."""

from datetime import date

from pydantic import BaseModel, Field

from app.schemas.goal import GoalResponse
from app.schemas.reward import RewardUnlockOutcomeResponse


class WeeklyPointsBody(BaseModel):
    """Any day of the week is accepted; it is normalised to that week's Monday."""

    week_start: date


class WeeklyPointsResponse(BaseModel):
    week_start: date
    points_earned: int
    user_points: int
    goals: list[GoalResponse] = Field(default_factory=list)
    unlocks: list[RewardUnlockOutcomeResponse] = Field(default_factory=list)


class GoalsProgressBody(BaseModel):
    points_earned: int
