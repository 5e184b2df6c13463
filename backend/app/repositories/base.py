"""
Repository contracts consumed by the points engine.

Services only talk to these interfaces; SqlRepositories (AsyncSession) and
InMemoryRepositories both satisfy them. Every method is async and may raise
a persistence error, which services let propagate.
"""

from contextlib import AbstractAsyncContextManager
from datetime import date
from typing import Protocol, TypeVar

from app.models import Goal, Program, Reward, User, UserReward, WeeklyPointsAward, WorkoutSession

EntityT = TypeVar("EntityT")


class CrudRepository(Protocol[EntityT]):
    async def get_by_id(self, id: str) -> EntityT | None: ...

    async def add(self, entity: EntityT) -> EntityT: ...

    async def save(self, entity: EntityT) -> EntityT: ...

    async def delete(self, entity: EntityT) -> None: ...


class UserRepository(CrudRepository[User], Protocol):
    async def get_by_email(self, email: str) -> User | None: ...

    async def list_all(self) -> list[User]: ...


class WorkoutSessionRepository(CrudRepository[WorkoutSession], Protocol):
    async def list_by_user(self, user_id: str) -> list[WorkoutSession]: ...

    async def list_by_user_and_range(self, user_id: str, start: date, end: date) -> list[WorkoutSession]:
        """Sessions with start <= date <= end (both inclusive), oldest first."""
        ...

    async def list_by_program(self, program_id: str) -> list[WorkoutSession]: ...


class ProgramRepository(CrudRepository[Program], Protocol):
    async def list_by_user(self, user_id: str) -> list[Program]: ...

    async def list_by_user_and_type(self, user_id: str, type_: str) -> list[Program]: ...


class RewardRepository(CrudRepository[Reward], Protocol):
    async def list_all(self) -> list[Reward]:
        """All rewards, cheapest first."""
        ...

    async def list_by_tier(self, tier: int) -> list[Reward]: ...

    async def list_by_points_cost(self, min_points: int, max_points: int | None = None) -> list[Reward]: ...

    async def get_by_name(self, name: str) -> Reward | None: ...


class UserRewardRepository(CrudRepository[UserReward], Protocol):
    async def list_by_user(self, user_id: str) -> list[UserReward]: ...

    async def get_by_user_and_reward(self, user_id: str, reward_id: str) -> UserReward | None: ...

    async def list_unlocked_reward_ids(self, user_id: str) -> list[str]: ...


class GoalRepository(CrudRepository[Goal], Protocol):
    async def list_by_user(self, user_id: str) -> list[Goal]: ...

    async def list_completed_by_user(self, user_id: str) -> list[Goal]: ...

    async def list_incomplete_by_user(self, user_id: str) -> list[Goal]: ...


class WeeklyAwardRepository(CrudRepository[WeeklyPointsAward], Protocol):
    async def get_for_week(self, user_id: str, week_start: date) -> WeeklyPointsAward | None: ...


class Repositories(Protocol):
    users: UserRepository
    sessions: WorkoutSessionRepository
    programs: ProgramRepository
    rewards: RewardRepository
    user_rewards: UserRewardRepository
    goals: GoalRepository
    weekly_awards: WeeklyAwardRepository

    def savepoint(self) -> AbstractAsyncContextManager[object]:
        """Nested unit of work: changes made inside are discarded if the block raises."""
        ...
