"""Pydantic schemas for goals API."""

from datetime import datetime

from pydantic import BaseModel


class GoalCreate(BaseModel):
    name: str
    points_required: int
    description: str | None = None
    reward_id: str | None = None


class GoalUpdate(BaseModel):
    name: str | None = None
    points_required: int | None = None
    description: str | None = None
    reward_id: str | None = None


class GoalResponse(BaseModel):
    id: str
    user_id: str
    name: str
    description: str | None
    points_required: int
    points_accumulated: int
    completed: bool
    reward_id: str | None
    created_at: datetime | None
    updated_at: datetime | None
