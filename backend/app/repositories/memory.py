"""In-memory repositories: used by tests and local runs without a database."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import date
from typing import Generic, TypeVar

from sqlalchemy import inspect as sa_inspect

from app.models import Goal, Program, Reward, User, UserReward, WeeklyPointsAward, WorkoutSession

EntityT = TypeVar("EntityT")


def _column_values(entity) -> dict:
    return {attr.key: getattr(entity, attr.key) for attr in sa_inspect(entity).mapper.column_attrs}


class InMemoryRepository(Generic[EntityT]):
    def __init__(self) -> None:
        self.items: dict[str, EntityT] = {}

    async def get_by_id(self, id: str) -> EntityT | None:
        return self.items.get(id)

    async def add(self, entity: EntityT) -> EntityT:
        if entity.id in self.items:
            raise ValueError(f"{type(entity).__name__} with id {entity.id} already exists")
        self.items[entity.id] = entity
        return entity

    async def save(self, entity: EntityT) -> EntityT:
        self.items[entity.id] = entity
        return entity

    async def delete(self, entity: EntityT) -> None:
        self.items.pop(entity.id, None)

    def _filter(self, predicate: Callable[[EntityT], bool]) -> list[EntityT]:
        return [e for e in self.items.values() if predicate(e)]


class InMemoryUserRepository(InMemoryRepository[User]):
    async def get_by_email(self, email: str) -> User | None:
        return next((u for u in self.items.values() if u.email == email), None)

    async def list_all(self) -> list[User]:
        return list(self.items.values())


class InMemoryWorkoutSessionRepository(InMemoryRepository[WorkoutSession]):
    async def list_by_user(self, user_id: str) -> list[WorkoutSession]:
        rows = self._filter(lambda s: s.user_id == user_id)
        return sorted(rows, key=lambda s: s.date, reverse=True)

    async def list_by_user_and_range(self, user_id: str, start: date, end: date) -> list[WorkoutSession]:
        rows = self._filter(lambda s: s.user_id == user_id and start <= s.date <= end)
        return sorted(rows, key=lambda s: s.date)

    async def list_by_program(self, program_id: str) -> list[WorkoutSession]:
        return self._filter(lambda s: s.program_id == program_id)


class InMemoryProgramRepository(InMemoryRepository[Program]):
    async def list_by_user(self, user_id: str) -> list[Program]:
        return sorted(self._filter(lambda p: p.user_id == user_id), key=lambda p: p.name)

    async def list_by_user_and_type(self, user_id: str, type_: str) -> list[Program]:
        rows = self._filter(lambda p: p.user_id == user_id and p.type == type_)
        return sorted(rows, key=lambda p: p.name)


class InMemoryRewardRepository(InMemoryRepository[Reward]):
    async def list_all(self) -> list[Reward]:
        return sorted(self.items.values(), key=lambda r: (r.points_cost, r.tier))

    async def list_by_tier(self, tier: int) -> list[Reward]:
        return sorted(self._filter(lambda r: r.tier == tier), key=lambda r: r.points_cost)

    async def list_by_points_cost(self, min_points: int, max_points: int | None = None) -> list[Reward]:
        rows = self._filter(
            lambda r: r.points_cost >= min_points and (max_points is None or r.points_cost <= max_points)
        )
        return sorted(rows, key=lambda r: r.points_cost)

    async def get_by_name(self, name: str) -> Reward | None:
        return next((r for r in self.items.values() if r.name == name), None)


class InMemoryUserRewardRepository(InMemoryRepository[UserReward]):
    async def add(self, entity: UserReward) -> UserReward:
        if await self.get_by_user_and_reward(entity.user_id, entity.reward_id) is not None:
            raise ValueError(f"UserReward for ({entity.user_id}, {entity.reward_id}) already exists")
        return await super().add(entity)

    async def list_by_user(self, user_id: str) -> list[UserReward]:
        return self._filter(lambda ur: ur.user_id == user_id)

    async def get_by_user_and_reward(self, user_id: str, reward_id: str) -> UserReward | None:
        return next(
            (ur for ur in self.items.values() if ur.user_id == user_id and ur.reward_id == reward_id),
            None,
        )

    async def list_unlocked_reward_ids(self, user_id: str) -> list[str]:
        return [ur.reward_id for ur in self.items.values() if ur.user_id == user_id and ur.unlocked]


class InMemoryGoalRepository(InMemoryRepository[Goal]):
    async def list_by_user(self, user_id: str) -> list[Goal]:
        return self._filter(lambda g: g.user_id == user_id)

    async def list_completed_by_user(self, user_id: str) -> list[Goal]:
        return self._filter(lambda g: g.user_id == user_id and g.completed)

    async def list_incomplete_by_user(self, user_id: str) -> list[Goal]:
        return self._filter(lambda g: g.user_id == user_id and not g.completed)


class InMemoryWeeklyAwardRepository(InMemoryRepository[WeeklyPointsAward]):
    async def get_for_week(self, user_id: str, week_start: date) -> WeeklyPointsAward | None:
        return next(
            (a for a in self.items.values() if a.user_id == user_id and a.week_start == week_start),
            None,
        )


class InMemoryRepositories:
    def __init__(self) -> None:
        self.users = InMemoryUserRepository()
        self.sessions = InMemoryWorkoutSessionRepository()
        self.programs = InMemoryProgramRepository()
        self.rewards = InMemoryRewardRepository()
        self.user_rewards = InMemoryUserRewardRepository()
        self.goals = InMemoryGoalRepository()
        self.weekly_awards = InMemoryWeeklyAwardRepository()

    def _repositories(self) -> list[InMemoryRepository]:
        return [
            self.users,
            self.sessions,
            self.programs,
            self.rewards,
            self.user_rewards,
            self.goals,
            self.weekly_awards,
        ]

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Snapshot every store and the column values of its entities; restore both if the block raises."""
        snapshot = [
            (repo, dict(repo.items), [(e, _column_values(e)) for e in repo.items.values()])
            for repo in self._repositories()
        ]
        try:
            yield
        except Exception:
            for repo, items, states in snapshot:
                repo.items = items
                for entity, values in states:
                    for key, value in values.items():
                        setattr(entity, key, value)
            raise
