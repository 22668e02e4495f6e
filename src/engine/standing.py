"""
Standing Calculator - composite tier score, learner tier and streak health.

tier score = (0.45 * average quiz score
              + 0.25 * mean modality score
              + 0.15 * lesson momentum
              + streak bonus + difficulty bonus + completion bonus) / 1.18

rounded and clamped to [0, 100]. The 1.18 divisor keeps the nominal ceiling
near 100 once the additive bonuses are included.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..config import config
from ..models.learning_profile import (
    TIER_ORDER,
    LearnerTier,
    PerformanceHistory,
    StreakHealth,
    clamp,
    round_half_up,
)


@dataclass(frozen=True)
class Standing:
    """Composite standing of a learner."""

    tier_score: int
    learner_tier: LearnerTier
    streak_health: StreakHealth

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "tierScore": self.tier_score,
            "learnerTier": self.learner_tier,
            "streakHealth": self.streak_health,
        }


def completion_bonus(completion_ratio: float) -> int:
    """+8 for a mostly finished course, +2 for a half-way one, -8 otherwise."""
    settings = config.adaptive
    if completion_ratio >= settings.completion_high:
        return settings.completion_bonus_high
    if completion_ratio >= settings.completion_mid:
        return settings.completion_bonus_mid
    return settings.completion_penalty


def calculate_tier_score(
    performance: PerformanceHistory,
    streak: int = 0,
    completion_ratio: Optional[float] = None,
) -> int:
    """
    Compute the composite 0-100 tier score.

    Args:
        performance: Performance snapshot
        streak: Current daily streak (negative values count as 0)
        completion_ratio: Course completion in [0, 1]; None means 1.0

    Returns:
        Integer tier score in [0, 100]
    """
    settings = config.adaptive
    if completion_ratio is None:
        completion_ratio = 1.0

    modality_average = round_half_up(sum(performance.modality_scores.values()) / 4)
    lesson_momentum = min(100, performance.total_lessons_completed * settings.momentum_per_lesson)
    difficulty_bonus = dict(settings.difficulty_bonus).get(performance.current_difficulty, 0)
    streak_bonus = clamp(streak * settings.streak_factor, 0, settings.streak_bonus_cap)

    weighted = (
        performance.average_quiz_score * settings.quiz_weight
        + modality_average * settings.modality_weight
        + lesson_momentum * settings.momentum_weight
        + streak_bonus
        + difficulty_bonus
        + completion_bonus(completion_ratio)
    )
    return int(clamp(round_half_up(weighted / settings.tier_divisor), 0, 100))


def tier_for_score(tier_score: int) -> LearnerTier:
    """Map a tier score to a named tier."""
    settings = config.adaptive
    if tier_score >= settings.legend_cutoff:
        return "legend"
    if tier_score >= settings.pro_cutoff:
        return "pro"
    if tier_score >= settings.intermediate_cutoff:
        return "intermediate"
    return "beginner"


def streak_health(streak: int) -> StreakHealth:
    """Classify a daily streak: 7+ strong, 3+ warning, otherwise critical."""
    settings = config.adaptive
    if streak >= settings.strong_streak:
        return "strong"
    if streak >= settings.warning_streak:
        return "warning"
    return "critical"


def calculate_standing(
    performance: PerformanceHistory,
    streak: int = 0,
    completion_ratio: Optional[float] = None,
) -> Standing:
    """Tier score, tier and streak health in one record."""
    score = calculate_tier_score(performance, streak, completion_ratio)
    return Standing(
        tier_score=score,
        learner_tier=tier_for_score(score),
        streak_health=streak_health(streak),
    )


def demote_tier(tier: Optional[str]) -> LearnerTier:
    """
    Move one tier down, stopping at beginner.

    Used by hosting applications for inactivity penalties; the engine itself
    never demotes. Unknown or missing tiers are treated as beginner.
    """
    if tier not in TIER_ORDER:
        return TIER_ORDER[0]
    index = TIER_ORDER.index(tier)
    return TIER_ORDER[max(0, index - 1)]
