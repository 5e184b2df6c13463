"""Sweep isolation against a real AsyncSession (SQLite via aiosqlite): a failed unlock is rolled back to its savepoint."""

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db.base import Base
from app.repositories import SqlRepositories
from app.services.reward_unlock import unlock_affordable_rewards
from app.services.rewards import create_reward
from app.services.users import create_user


@pytest_asyncio.fixture
async def db_session(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'rewards.db'}")

    # pysqlite's implicit transactions break SAVEPOINT; emit BEGIN ourselves.
    @event.listens_for(engine.sync_engine, "connect")
    def _no_implicit_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _explicit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session
    await engine.dispose()


@pytest.mark.asyncio
async def test_sweep_rolls_back_failed_unlock_to_savepoint(db_session, monkeypatch):
    repos = SqlRepositories(db_session)
    user = await create_user(repos, "Alex Runner", "alex@example.com")
    user.add_points(3)
    await repos.users.save(user)
    cheap = await create_reward(repos, "Playlist", 1, 1)
    mid = await create_reward(repos, "Massage", 2, 2)
    await create_reward(repos, "Dinner", 3, 5)
    await db_session.commit()

    original = repos.user_rewards.add

    async def failing_add(entity):
        if entity.reward_id == cheap.id:
            raise RuntimeError("unique violation")
        return await original(entity)

    monkeypatch.setattr(repos.user_rewards, "add", failing_add)
    outcomes = await unlock_affordable_rewards(repos, user.id)
    await db_session.commit()

    assert [(o.reward_id, o.unlocked) for o in outcomes] == [(cheap.id, False), (mid.id, True)]
    await db_session.refresh(user)
    assert user.points == 1
    assert await repos.user_rewards.get_by_user_and_reward(user.id, cheap.id) is None
    assert (await repos.user_rewards.get_by_user_and_reward(user.id, mid.id)).unlocked is True
