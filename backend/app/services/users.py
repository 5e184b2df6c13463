from app.core.errors import NotFoundError, ValidationError
from app.core.ids import IdGenerator, utcnow, uuid_id
from app.core.validation import require_text
from app.models.user import User
from app.repositories.base import Repositories


async def create_user(
    repos: Repositories,
    name: str,
    email: str,
    *,
    id_generator: IdGenerator = uuid_id,
) -> User:
    name = require_text(name, "name")
    email = require_text(email, "email").lower()
    if await repos.users.get_by_email(email) is not None:
        raise ValidationError(f"Email {email} is already registered")
    now = utcnow()
    return await repos.users.add(
        User(id=id_generator(), name=name, email=email, points=0, created_at=now, updated_at=now)
    )


async def get_user(repos: Repositories, user_id: str) -> User:
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


async def list_users(repos: Repositories) -> list[User]:
    return await repos.users.list_all()
