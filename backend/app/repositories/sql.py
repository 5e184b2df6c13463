"""SQLAlchemy (AsyncSession) implementation of the repository contracts."""

from contextlib import AbstractAsyncContextManager
from datetime import date
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.base import Base
from app.models import Goal, Program, Reward, User, UserReward, WeeklyPointsAward, WorkoutSession

ModelType = TypeVar("ModelType", bound=Base)


class SqlRepository(Generic[ModelType]):
    """
    Generic CRUD over one model. Writes are flushed, never committed:
    the caller owning the session (get_db, scheduler job) commits.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: str) -> ModelType | None:
        return await self.session.get(self.model, id)

    async def add(self, entity: ModelType) -> ModelType:
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def save(self, entity: ModelType) -> ModelType:
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def _all(self, stmt) -> list[ModelType]:
        r = await self.session.execute(stmt)
        return list(r.scalars().all())

    async def _one(self, stmt) -> ModelType | None:
        r = await self.session.execute(stmt)
        return r.scalar_one_or_none()


class SqlUserRepository(SqlRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        return await self._one(select(User).where(User.email == email))

    async def list_all(self) -> list[User]:
        return await self._all(select(User).order_by(User.created_at))


class SqlWorkoutSessionRepository(SqlRepository[WorkoutSession]):
    model = WorkoutSession

    async def list_by_user(self, user_id: str) -> list[WorkoutSession]:
        return await self._all(
            select(WorkoutSession).where(WorkoutSession.user_id == user_id).order_by(WorkoutSession.date.desc())
        )

    async def list_by_user_and_range(self, user_id: str, start: date, end: date) -> list[WorkoutSession]:
        return await self._all(
            select(WorkoutSession)
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.date >= start,
                WorkoutSession.date <= end,
            )
            .order_by(WorkoutSession.date, WorkoutSession.created_at)
        )

    async def list_by_program(self, program_id: str) -> list[WorkoutSession]:
        return await self._all(select(WorkoutSession).where(WorkoutSession.program_id == program_id))


class SqlProgramRepository(SqlRepository[Program]):
    model = Program

    async def list_by_user(self, user_id: str) -> list[Program]:
        return await self._all(select(Program).where(Program.user_id == user_id).order_by(Program.name))

    async def list_by_user_and_type(self, user_id: str, type_: str) -> list[Program]:
        return await self._all(
            select(Program).where(Program.user_id == user_id, Program.type == type_).order_by(Program.name)
        )


class SqlRewardRepository(SqlRepository[Reward]):
    model = Reward

    async def list_all(self) -> list[Reward]:
        return await self._all(select(Reward).order_by(Reward.points_cost, Reward.tier))

    async def list_by_tier(self, tier: int) -> list[Reward]:
        return await self._all(select(Reward).where(Reward.tier == tier).order_by(Reward.points_cost))

    async def list_by_points_cost(self, min_points: int, max_points: int | None = None) -> list[Reward]:
        q = select(Reward).where(Reward.points_cost >= min_points)
        if max_points is not None:
            q = q.where(Reward.points_cost <= max_points)
        return await self._all(q.order_by(Reward.points_cost))

    async def get_by_name(self, name: str) -> Reward | None:
        return await self._one(select(Reward).where(Reward.name == name).limit(1))


class SqlUserRewardRepository(SqlRepository[UserReward]):
    model = UserReward

    async def list_by_user(self, user_id: str) -> list[UserReward]:
        return await self._all(select(UserReward).where(UserReward.user_id == user_id))

    async def get_by_user_and_reward(self, user_id: str, reward_id: str) -> UserReward | None:
        return await self._one(
            select(UserReward).where(UserReward.user_id == user_id, UserReward.reward_id == reward_id)
        )

    async def list_unlocked_reward_ids(self, user_id: str) -> list[str]:
        r = await self.session.execute(
            select(UserReward.reward_id).where(UserReward.user_id == user_id, UserReward.unlocked.is_(True))
        )
        return [row[0] for row in r.all()]


class SqlGoalRepository(SqlRepository[Goal]):
    model = Goal

    async def list_by_user(self, user_id: str) -> list[Goal]:
        return await self._all(select(Goal).where(Goal.user_id == user_id).order_by(Goal.created_at))

    async def list_completed_by_user(self, user_id: str) -> list[Goal]:
        return await self._all(
            select(Goal).where(Goal.user_id == user_id, Goal.completed.is_(True)).order_by(Goal.created_at)
        )

    async def list_incomplete_by_user(self, user_id: str) -> list[Goal]:
        return await self._all(
            select(Goal).where(Goal.user_id == user_id, Goal.completed.is_(False)).order_by(Goal.created_at)
        )


class SqlWeeklyAwardRepository(SqlRepository[WeeklyPointsAward]):
    model = WeeklyPointsAward

    async def get_for_week(self, user_id: str, week_start: date) -> WeeklyPointsAward | None:
        return await self._one(
            select(WeeklyPointsAward).where(
                WeeklyPointsAward.user_id == user_id,
                WeeklyPointsAward.week_start == week_start,
            )
        )


class SqlRepositories:
    """All repositories bound to one AsyncSession (one transaction)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.users = SqlUserRepository(session)
        self.sessions = SqlWorkoutSessionRepository(session)
        self.programs = SqlProgramRepository(session)
        self.rewards = SqlRewardRepository(session)
        self.user_rewards = SqlUserRewardRepository(session)
        self.goals = SqlGoalRepository(session)
        self.weekly_awards = SqlWeeklyAwardRepository(session)

    def savepoint(self) -> AbstractAsyncContextManager[object]:
        return self.session.begin_nested()
