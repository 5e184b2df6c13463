"""Pydantic schemas for workout session API."""

import datetime as dt

from pydantic import BaseModel, Field

from app.models.workout_session import WorkoutType
from app.schemas.goal import GoalResponse
from app.schemas.reward import RewardUnlockOutcomeResponse


class WorkoutSessionCreate(BaseModel):
    """Body for logging a session."""

    type: WorkoutType
    date: dt.date
    duration: int = Field(..., description="Minutes, > 0")
    program_id: str | None = None
    notes: str | None = None


class WorkoutSessionUpdate(BaseModel):
    """Body for updating a session (partial)."""

    type: WorkoutType | None = None
    date: dt.date | None = None
    duration: int | None = None
    program_id: str | None = None
    notes: str | None = None


class ApplyProgramBody(BaseModel):
    program_id: str


class WorkoutSessionResponse(BaseModel):
    """Single session as returned by the API."""

    id: str
    user_id: str
    type: str
    date: dt.date
    duration: int
    program_id: str | None
    notes: str | None
    created_at: dt.datetime | None
    updated_at: dt.datetime | None


class SessionLoggedResponse(BaseModel):
    """Result of logging a session: the session plus any points, goal and reward changes it triggered."""

    session: WorkoutSessionResponse
    sessions_in_week: int
    points_earned: int
    user_points: int
    goals: list[GoalResponse] = Field(default_factory=list)
    unlocks: list[RewardUnlockOutcomeResponse] = Field(default_factory=list)
