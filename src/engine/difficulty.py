"""
Difficulty Adjuster - steps difficulty one level at a time from a rolling quiz average.

Strategy:
- Fewer than 3 completed lessons: stay put (not enough evidence)
- Rolling average >= 85: step up one level (ceiling: advanced)
- Rolling average < 55: step down one level (floor: beginner)
- Anything in between: stay put

The gap between the two thresholds is the hysteresis band; a single noisy
score cannot flip the level back and forth.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from ..config import config
from ..models.learning_profile import (
    DIFFICULTY_ORDER,
    INSUFFICIENT_SAMPLE_REASON,
    Difficulty,
    PerformanceHistory,
    Trend,
    round_half_up,
)


@dataclass(frozen=True)
class DifficultyDecision:
    """
    Outcome of a difficulty check.

    Attributes:
        difficulty: Level to use next
        reason: User-facing explanation
        direction: "up", "down" or "stable" (stable whenever the level is unchanged)
    """
    difficulty: Difficulty
    reason: str
    direction: Trend

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "difficulty": self.difficulty,
            "reason": self.reason,
            "direction": self.direction,
        }


def rolling_average(performance: PerformanceHistory) -> int:
    """
    Mean of the recent-score window, or the lifetime average when the window is short.
    """
    settings = config.adaptive
    window = performance.recent_quiz_scores[-settings.rolling_window:]
    if len(window) >= settings.min_window_scores:
        return round_half_up(sum(window) / len(window))
    return performance.average_quiz_score


def decide_difficulty(performance: PerformanceHistory) -> DifficultyDecision:
    """
    Decide the next difficulty level with a reason and direction.

    Args:
        performance: Current performance snapshot

    Returns:
        DifficultyDecision; the level moves by at most one step
    """
    settings = config.adaptive
    current = performance.current_difficulty
    if current not in DIFFICULTY_ORDER:
        current = DIFFICULTY_ORDER[0]

    if performance.total_lessons_completed < settings.min_lessons_for_adaptation:
        return DifficultyDecision(current, INSUFFICIENT_SAMPLE_REASON, "stable")

    average = rolling_average(performance)
    prefix = f"Average {average}% in recent quizzes."
    index = DIFFICULTY_ORDER.index(current)

    if average >= settings.step_up_threshold:
        if index == len(DIFFICULTY_ORDER) - 1:
            decision = DifficultyDecision(current, f"{prefix} Staying at Advanced.", "stable")
        else:
            target = DIFFICULTY_ORDER[index + 1]
            decision = DifficultyDecision(
                target, f"{prefix} Difficulty increased to {target.title()}.", "up"
            )
    elif average < settings.step_down_threshold:
        if index == 0:
            decision = DifficultyDecision(
                current, f"{prefix} Staying at Beginner for stronger foundations.", "stable"
            )
        else:
            target = DIFFICULTY_ORDER[index - 1]
            decision = DifficultyDecision(
                target, f"{prefix} Difficulty lowered to {target.title()} for support.", "down"
            )
    else:
        decision = DifficultyDecision(
            current, f"{prefix} Difficulty remains balanced.", "stable"
        )

    if decision.direction != "stable":
        logger.debug(f"Difficulty {current} -> {decision.difficulty} (rolling average {average})")
    return decision


def next_difficulty(performance: PerformanceHistory) -> Difficulty:
    """Shortcut: only the level from decide_difficulty()."""
    return decide_difficulty(performance).difficulty
