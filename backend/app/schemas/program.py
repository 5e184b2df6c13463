"""Pydantic schemas for programs and their exercises."""

from datetime import datetime

from pydantic import BaseModel

from app.models.workout_session import WorkoutType


class ExerciseBody(BaseModel):
    name: str
    sets: int
    reps: int
    weight: float | None = None  # kg; omitted for yoga, pilates, ...
    duration: int | None = None  # minutes, for timed exercises
    notes: str | None = None


class ExerciseUpdate(BaseModel):
    sets: int | None = None
    reps: int | None = None
    weight: float | None = None
    duration: int | None = None
    notes: str | None = None


class ProgramCreate(BaseModel):
    name: str
    type: WorkoutType
    description: str | None = None
    exercises: list[ExerciseBody] = []


class ProgramUpdate(BaseModel):
    name: str | None = None
    type: WorkoutType | None = None
    description: str | None = None
    exercises: list[ExerciseBody] | None = None


class ProgramResponse(BaseModel):
    id: str
    user_id: str
    name: str
    type: str
    description: str | None
    exercises: list[dict]
    created_at: datetime | None
    updated_at: datetime | None
