"""Programs: reusable workout templates and their exercises."""

from app.core.errors import NotFoundError, ValidationError
from app.core.ids import IdGenerator, utcnow, uuid_id
from app.core.validation import optional_positive, optional_text, require_positive, require_text
from app.models.program import Program
from app.models.workout_session import WorkoutType
from app.repositories.base import Repositories
from app.services.workout_sessions import normalize_workout_type


def build_exercise(
    name: str,
    sets: int,
    reps: int,
    weight: float | None = None,
    duration: int | None = None,
    notes: str | None = None,
) -> dict:
    """Validated exercise dict as stored in Program.exercises."""
    if weight is not None and weight < 0:
        raise ValidationError(f"weight must be >= 0 (got {weight})")
    return {
        "name": require_text(name, "exercise name"),
        "sets": require_positive(sets, "sets"),
        "reps": require_positive(reps, "reps"),
        "weight": weight,
        "duration": optional_positive(duration, "duration"),
        "notes": optional_text(notes),
    }


def _check_unique_names(exercises: list[dict]) -> None:
    names = [e["name"] for e in exercises]
    if len(names) != len(set(names)):
        raise ValidationError("Exercise names must be unique within a program")


async def create_program(
    repos: Repositories,
    user_id: str,
    name: str,
    type_: str | WorkoutType,
    description: str | None = None,
    exercises: list[dict] | None = None,
    *,
    id_generator: IdGenerator = uuid_id,
) -> Program:
    if await repos.users.get_by_id(user_id) is None:
        raise NotFoundError("User", user_id)
    built = [build_exercise(**e) for e in exercises or []]
    _check_unique_names(built)
    now = utcnow()
    program = Program(
        id=id_generator(),
        user_id=user_id,
        name=require_text(name, "name"),
        type=normalize_workout_type(type_),
        description=optional_text(description),
        exercises=built,
        created_at=now,
        updated_at=now,
    )
    return await repos.programs.add(program)


async def get_program(repos: Repositories, program_id: str) -> Program:
    program = await repos.programs.get_by_id(program_id)
    if program is None:
        raise NotFoundError("Program", program_id)
    return program


async def list_programs(
    repos: Repositories,
    user_id: str,
    type_: str | WorkoutType | None = None,
) -> list[Program]:
    if type_ is not None:
        return await repos.programs.list_by_user_and_type(user_id, normalize_workout_type(type_))
    return await repos.programs.list_by_user(user_id)


async def update_program(
    repos: Repositories,
    program_id: str,
    *,
    name: str | None = None,
    type_: str | WorkoutType | None = None,
    description: str | None = None,
    exercises: list[dict] | None = None,
) -> Program:
    program = await get_program(repos, program_id)
    if name is not None:
        name = require_text(name, "name")
    workout_type = normalize_workout_type(type_) if type_ is not None else None
    program.update_details(name, workout_type, description)
    if exercises is not None:
        built = [build_exercise(**e) for e in exercises]
        _check_unique_names(built)
        program.replace_exercises(built)
    return await repos.programs.save(program)


async def delete_program(repos: Repositories, program_id: str) -> None:
    """Sessions that used the program are kept and detached from it."""
    program = await get_program(repos, program_id)
    for session in await repos.sessions.list_by_program(program_id):
        session.update_details(program_id=None)
        await repos.sessions.save(session)
    await repos.programs.delete(program)


async def add_exercise(repos: Repositories, program_id: str, **exercise) -> Program:
    program = await get_program(repos, program_id)
    built = build_exercise(**exercise)
    if program.find_exercise(built["name"]) is not None:
        raise ValidationError(f"Exercise {built['name']!r} already exists in program")
    program.add_exercise(built)
    return await repos.programs.save(program)


async def update_exercise(
    repos: Repositories,
    program_id: str,
    exercise_name: str,
    *,
    sets: int | None = None,
    reps: int | None = None,
    weight: float | None = None,
    duration: int | None = None,
    notes: str | None = None,
) -> Program:
    """Change only the given fields of the named exercise."""
    program = await get_program(repos, program_id)
    current = program.find_exercise(exercise_name)
    if current is None:
        raise NotFoundError("Exercise", exercise_name)
    merged = build_exercise(
        name=exercise_name,
        sets=sets if sets is not None else current["sets"],
        reps=reps if reps is not None else current["reps"],
        weight=weight if weight is not None else current.get("weight"),
        duration=duration if duration is not None else current.get("duration"),
        notes=notes if notes is not None else current.get("notes"),
    )
    program.update_exercise(exercise_name, merged)
    return await repos.programs.save(program)


async def remove_exercise(repos: Repositories, program_id: str, exercise_name: str) -> Program:
    program = await get_program(repos, program_id)
    if program.find_exercise(exercise_name) is None:
        raise NotFoundError("Exercise", exercise_name)
    program.remove_exercise(exercise_name)
    return await repos.programs.save(program)
