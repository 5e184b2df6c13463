"""User endpoints: register a user, read balance."""

from fastapi import APIRouter

from app.api.deps import Repos
from app.models.user import User
from app.schemas.user import UserCreate, UserResponse
from app.services.users import create_user, get_user, list_users

router = APIRouter(prefix="/users", tags=["users"])


def user_to_response(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "points": user.points,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


@router.post(
    "",
    response_model=UserResponse,
    status_code=201,
    summary="Create user",
    responses={422: {"description": "Empty name/email or email already registered"}},
)
async def create_user_endpoint(repos: Repos, body: UserCreate) -> dict:
    user = await create_user(repos, body.name, body.email)
    return user_to_response(user)


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users_endpoint(repos: Repos) -> list[dict]:
    return [user_to_response(u) for u in await list_users(repos)]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user (with points balance)",
    responses={404: {"description": "User not found"}},
)
async def get_user_endpoint(repos: Repos, user_id: str) -> dict:
    return user_to_response(await get_user(repos, user_id))
