"""Programs API: reusable workout templates and their exercises."""

from fastapi import APIRouter

from app.api.deps import Repos
from app.models.program import Program
from app.models.workout_session import WorkoutType
from app.schemas.program import ExerciseBody, ExerciseUpdate, ProgramCreate, ProgramResponse, ProgramUpdate
from app.services.programs import (
    add_exercise,
    create_program,
    delete_program,
    get_program,
    list_programs,
    remove_exercise,
    update_exercise,
    update_program,
)

router = APIRouter(tags=["programs"])


def program_to_response(program: Program) -> dict:
    return {
        "id": program.id,
        "user_id": program.user_id,
        "name": program.name,
        "type": program.type,
        "description": program.description,
        "exercises": program.exercises or [],
        "created_at": program.created_at,
        "updated_at": program.updated_at,
    }


@router.post(
    "/users/{user_id}/programs",
    response_model=ProgramResponse,
    status_code=201,
    summary="Create program",
)
async def create_program_endpoint(repos: Repos, user_id: str, body: ProgramCreate) -> dict:
    program = await create_program(
        repos,
        user_id,
        body.name,
        body.type,
        description=body.description,
        exercises=[e.model_dump() for e in body.exercises],
    )
    return program_to_response(program)


@router.get("/users/{user_id}/programs", response_model=list[ProgramResponse], summary="List programs")
async def list_programs_endpoint(repos: Repos, user_id: str, type: WorkoutType | None = None) -> list[dict]:
    return [program_to_response(p) for p in await list_programs(repos, user_id, type)]


@router.get("/programs/{program_id}", response_model=ProgramResponse, summary="Get program")
async def get_program_endpoint(repos: Repos, program_id: str) -> dict:
    return program_to_response(await get_program(repos, program_id))


@router.patch("/programs/{program_id}", response_model=ProgramResponse, summary="Update program")
async def update_program_endpoint(repos: Repos, program_id: str, body: ProgramUpdate) -> dict:
    exercises = [e.model_dump() for e in body.exercises] if body.exercises is not None else None
    program = await update_program(
        repos,
        program_id,
        name=body.name,
        type_=body.type,
        description=body.description,
        exercises=exercises,
    )
    return program_to_response(program)


@router.delete("/programs/{program_id}", status_code=204, summary="Delete program")
async def delete_program_endpoint(repos: Repos, program_id: str) -> None:
    await delete_program(repos, program_id)


@router.post(
    "/programs/{program_id}/exercises",
    response_model=ProgramResponse,
    status_code=201,
    summary="Add exercise",
)
async def add_exercise_endpoint(repos: Repos, program_id: str, body: ExerciseBody) -> dict:
    return program_to_response(await add_exercise(repos, program_id, **body.model_dump()))


@router.patch(
    "/programs/{program_id}/exercises/{exercise_name}",
    response_model=ProgramResponse,
    summary="Update exercise",
)
async def update_exercise_endpoint(
    repos: Repos, program_id: str, exercise_name: str, body: ExerciseUpdate
) -> dict:
    program = await update_exercise(repos, program_id, exercise_name, **body.model_dump())
    return program_to_response(program)


@router.delete(
    "/programs/{program_id}/exercises/{exercise_name}",
    response_model=ProgramResponse,
    summary="Remove exercise",
)
async def remove_exercise_endpoint(repos: Repos, program_id: str, exercise_name: str) -> dict:
    return program_to_response(await remove_exercise(repos, program_id, exercise_name))
