"""Workout sessions API: log sessions (triggering the weekly points award), edit, list, delete."""

from datetime import date

from fastapi import APIRouter

from app.api.deps import Repos
from app.api.v1.goals import goal_to_response
from app.api.v1.rewards import outcome_to_response
from app.core.validation import UNSET
from app.models.workout_session import WorkoutSession
from app.schemas.workout import (
    ApplyProgramBody,
    SessionLoggedResponse,
    WorkoutSessionCreate,
    WorkoutSessionResponse,
    WorkoutSessionUpdate,
)
from app.services.orchestrator import log_workout_session
from app.services.workout_sessions import (
    apply_program_to_session,
    delete_workout_session,
    get_workout_session,
    list_workout_sessions,
    update_workout_session,
)

router = APIRouter(tags=["workouts"])


def session_to_response(row: WorkoutSession) -> dict:
    return {
        "id": row.id,
        "user_id": row.user_id,
        "type": row.type,
        "date": row.date,
        "duration": row.duration,
        "program_id": row.program_id,
        "notes": row.notes,
        "created_at": row.created_at,
        "updated_at": row.updated_at,
    }


@router.post(
    "/users/{user_id}/sessions",
    response_model=SessionLoggedResponse,
    status_code=201,
    summary="Log workout session",
    responses={
        404: {"description": "User or program not found"},
        422: {"description": "Invalid duration or type"},
    },
)
async def log_session(repos: Repos, user_id: str, body: WorkoutSessionCreate) -> dict:
    """
    Persist the session. When the week's session count reaches a multiple of 3
    the week's points are awarded, goals progress and affordable rewards unlock.
    """
    result = await log_workout_session(
        repos,
        user_id,
        body.type,
        body.date,
        body.duration,
        program_id=body.program_id,
        notes=body.notes,
    )
    return {
        "session": session_to_response(result.session),
        "sessions_in_week": result.sessions_in_week,
        "points_earned": result.points.points_earned,
        "user_points": result.points.user_points,
        "goals": [goal_to_response(g) for g in result.points.goals],
        "unlocks": [outcome_to_response(o) for o in result.points.unlocks],
    }


@router.get(
    "/users/{user_id}/sessions",
    response_model=list[WorkoutSessionResponse],
    summary="List workout sessions",
)
async def list_sessions(
    repos: Repos,
    user_id: str,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[dict]:
    """Sessions of the user, optionally limited to from_date..to_date (inclusive)."""
    rows = await list_workout_sessions(repos, user_id, from_date, to_date)
    return [session_to_response(r) for r in rows]


@router.get("/sessions/{session_id}", response_model=WorkoutSessionResponse, summary="Get workout session")
async def get_session(repos: Repos, session_id: str) -> dict:
    return session_to_response(await get_workout_session(repos, session_id))


@router.patch("/sessions/{session_id}", response_model=WorkoutSessionResponse, summary="Update workout session")
async def update_session(repos: Repos, session_id: str, body: WorkoutSessionUpdate) -> dict:
    """Only fields present in the body change; `"program_id": null` or `"notes": null` clears them."""
    sent = body.model_fields_set
    row = await update_workout_session(
        repos,
        session_id,
        type_=body.type,
        date_=body.date,
        duration=body.duration,
        program_id=body.program_id if "program_id" in sent else UNSET,
        notes=body.notes if "notes" in sent else UNSET,
    )
    return session_to_response(row)


@router.post(
    "/sessions/{session_id}/program",
    response_model=WorkoutSessionResponse,
    summary="Attach a program to a session",
)
async def apply_program(repos: Repos, session_id: str, body: ApplyProgramBody) -> dict:
    return session_to_response(await apply_program_to_session(repos, session_id, body.program_id))


@router.delete("/sessions/{session_id}", status_code=204, summary="Delete workout session")
async def delete_session(repos: Repos, session_id: str) -> None:
    """Points already granted for the session's week are kept."""
    await delete_workout_session(repos, session_id)
