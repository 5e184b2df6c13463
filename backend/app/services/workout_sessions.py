"""Workout session store: create, edit, query and delete logged sessions."""

from datetime import date

from app.core.errors import NotFoundError, ValidationError
from app.core.ids import IdGenerator, utcnow, uuid_id
from app.core.validation import UNSET, optional_text, require_positive
from app.models.workout_session import WorkoutSession, WorkoutType
from app.repositories.base import Repositories

WORKOUT_TYPES = frozenset(t.value for t in WorkoutType)


def normalize_workout_type(value: str | WorkoutType) -> str:
    raw = value.value if isinstance(value, WorkoutType) else (value or "").strip().lower()
    if raw not in WORKOUT_TYPES:
        raise ValidationError(f"Unknown workout type {value!r}; expected one of {sorted(WORKOUT_TYPES)}")
    return raw


async def _ensure_user(repos: Repositories, user_id: str) -> None:
    if await repos.users.get_by_id(user_id) is None:
        raise NotFoundError("User", user_id)


async def _ensure_program(repos: Repositories, program_id: str) -> None:
    if await repos.programs.get_by_id(program_id) is None:
        raise NotFoundError("Program", program_id)


async def create_workout_session(
    repos: Repositories,
    user_id: str,
    type_: str | WorkoutType,
    date_: date,
    duration: int,
    program_id: str | None = None,
    notes: str | None = None,
    *,
    id_generator: IdGenerator = uuid_id,
) -> WorkoutSession:
    """Validate and persist a new session. Awarding points is the orchestrator's job."""
    workout_type = normalize_workout_type(type_)
    require_positive(duration, "duration")
    await _ensure_user(repos, user_id)
    if program_id is not None:
        await _ensure_program(repos, program_id)
    now = utcnow()
    session = WorkoutSession(
        id=id_generator(),
        user_id=user_id,
        type=workout_type,
        date=date_,
        duration=duration,
        program_id=program_id,
        notes=optional_text(notes),
        created_at=now,
        updated_at=now,
    )
    return await repos.sessions.add(session)


async def get_workout_session(repos: Repositories, session_id: str) -> WorkoutSession:
    session = await repos.sessions.get_by_id(session_id)
    if session is None:
        raise NotFoundError("WorkoutSession", session_id)
    return session


async def update_workout_session(
    repos: Repositories,
    session_id: str,
    *,
    type_: str | WorkoutType | None = None,
    date_: date | None = None,
    duration: int | None = None,
    program_id: str | None = UNSET,
    notes: str | None = UNSET,
) -> WorkoutSession:
    """
    Partial update. program_id and notes are cleared by an explicit None.
    Points already granted for the old week are not revisited.
    """
    session = await get_workout_session(repos, session_id)
    workout_type = normalize_workout_type(type_) if type_ is not None else None
    if duration is not None:
        require_positive(duration, "duration")
    if program_id is not UNSET:
        program_id = program_id or None
        if program_id is not None:
            await _ensure_program(repos, program_id)
    if notes is not UNSET:
        notes = optional_text(notes)
    session.update_details(workout_type, date_, duration, program_id, notes)
    return await repos.sessions.save(session)


async def apply_program_to_session(repos: Repositories, session_id: str, program_id: str) -> WorkoutSession:
    session = await get_workout_session(repos, session_id)
    await _ensure_program(repos, program_id)
    session.update_details(program_id=program_id)
    return await repos.sessions.save(session)


async def list_workout_sessions(
    repos: Repositories,
    user_id: str,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[WorkoutSession]:
    """All sessions of the user, or those with from_date <= date <= to_date (either bound optional)."""
    if from_date is None and to_date is None:
        return await repos.sessions.list_by_user(user_id)
    from_date = from_date or date.min
    to_date = to_date or date.max
    if from_date > to_date:
        raise ValidationError("from_date must not be after to_date")
    return await repos.sessions.list_by_user_and_range(user_id, from_date, to_date)


async def delete_workout_session(repos: Repositories, session_id: str) -> None:
    session = await get_workout_session(repos, session_id)
    await repos.sessions.delete(session)
