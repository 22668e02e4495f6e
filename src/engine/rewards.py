"""
Daily reward cycle for consecutive-day streaks.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DailyReward:
    day: int
    xp: int
    gems: int
    icon: str


DAILY_REWARDS: tuple[DailyReward, ...] = (
    DailyReward(1, 10, 0, "🎁"),
    DailyReward(2, 20, 0, "📦"),
    DailyReward(3, 25, 1, "💎"),
    DailyReward(4, 30, 0, "🎁"),
    DailyReward(5, 40, 2, "💎"),
    DailyReward(6, 50, 0, "🎁"),
    DailyReward(7, 75, 5, "🎉"),
)


def daily_reward(streak: int) -> DailyReward:
    """
    Reward for today given the current streak.

    A streak below 1 counts as day 1; the cycle repeats every 7 days.

    Example:
        >>> daily_reward(9).day
        2
    """
    day = (max(streak, 1) - 1) % len(DAILY_REWARDS)
    return DAILY_REWARDS[day]
