"""Prometheus counters for the points engine (exposed on /metrics)."""

from prometheus_client import Counter

POINTS_AWARDED = Counter(
    "fitness_points_awarded_total",
    "Points credited to users by the weekly award",
)
REWARDS_UNLOCKED = Counter(
    "fitness_rewards_unlocked_total",
    "Rewards unlocked",
    ["source"],  # manual | sweep | goal
)
REWARD_UNLOCK_FAILURES = Counter(
    "fitness_reward_unlock_failures_total",
    "Reward unlock attempts that failed during the automatic sweep",
)
