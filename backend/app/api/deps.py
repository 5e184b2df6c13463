"""FastAPI dependencies: repositories bound to the request's DB session."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.repositories import Repositories, SqlRepositories


async def get_repositories(
    session: Annotated[AsyncSession, Depends(get_db)],
) -> Repositories:
    """One repository bundle per request; get_db commits on success and rolls back on error."""
    return SqlRepositories(session)


Repos = Annotated[Repositories, Depends(get_repositories)]
