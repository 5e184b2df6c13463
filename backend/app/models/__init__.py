from app.models.user import User
from app.models.program import Program
from app.models.workout_session import WorkoutSession, WorkoutType
from app.models.reward import Reward
from app.models.user_reward import UserReward
from app.models.goal import Goal
from app.models.weekly_points_award import WeeklyPointsAward

__all__ = [
    "User",
    "Program",
    "WorkoutSession",
    "WorkoutType",
    "Reward",
    "UserReward",
    "Goal",
    "WeeklyPointsAward",
]
