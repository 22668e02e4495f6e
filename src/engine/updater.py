"""
Performance Updater - the single reducer applied after each completed quiz.

Steps, in order:
1. Exponential moving average (alpha 0.3) on the quizzed modality
2. True running mean for the lifetime quiz average
3. Strong/weak topic bookkeeping (kept disjoint, most recent 5 each)
4. Recent score window (most recent 5)
5. Trend of the lifetime average (+/- 3 points)
6. Difficulty decision on the updated snapshot
7. Standing (tier score, tier, streak health) on the fully updated snapshot

Calling it twice with the same score is two quizzes, not one: the update
is a state transition and is intentionally not idempotent.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from loguru import logger

from ..config import config
from ..models.learning_profile import (
    Difficulty,
    LearnerTier,
    PerformanceHistory,
    StreakHealth,
    Trend,
    clamp_score,
    round_half_up,
)
from ..models.quiz_result import QuizResult
from .difficulty import decide_difficulty
from .standing import calculate_standing


def _update_topics(
    strong: tuple[str, ...],
    weak: tuple[str, ...],
    topic: str,
    score: int,
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Classify topic as strong or weak from score; both lists stay disjoint."""
    settings = config.adaptive
    topic = topic.lower()
    strong_list = list(strong)
    weak_list = list(weak)

    if topic:
        if score >= settings.strong_topic_threshold and topic not in strong_list:
            strong_list.append(topic)
            weak_list = [t for t in weak_list if t != topic]
        elif score < settings.weak_topic_threshold and topic not in weak_list:
            weak_list.append(topic)
            strong_list = [t for t in strong_list if t != topic]

    memory = settings.topic_memory
    return tuple(strong_list[-memory:]), tuple(weak_list[-memory:])


def _trend(previous_average: int, new_average: int) -> Trend:
    delta = config.adaptive.trend_delta
    if new_average >= previous_average + delta:
        return "up"
    if new_average <= previous_average - delta:
        return "down"
    return "stable"


def apply_quiz(
    performance: PerformanceHistory,
    quiz_score: float,
    modality: str,
    topic: str,
    streak: int = 0,
    completion_ratio: Optional[float] = None,
) -> PerformanceHistory:
    """
    Fold one quiz result into a performance snapshot.

    Args:
        performance: Snapshot before the quiz (never mutated)
        quiz_score: Quiz score, clamped to [0, 100]
        modality: Modality the lesson used (unknown: modality scores unchanged)
        topic: Course topic, stored lowercased in strong/weak topics
        streak: Current daily streak
        completion_ratio: Course completion in [0, 1]; None means 1.0

    Returns:
        New PerformanceHistory
    """
    settings = config.adaptive
    score = clamp_score(quiz_score)
    alpha = settings.ema_alpha

    # 1. EMA on the quizzed modality
    updated = performance
    if modality in performance.modality_scores:
        smoothed = round_half_up(
            performance.modality_score(modality) * (1 - alpha) + score * alpha
        )
        updated = updated.with_modality_score(modality, smoothed)
    else:
        logger.debug(f"Unknown modality '{modality}', modality scores unchanged")

    # 2. Running mean over all completed lessons
    previous_lessons = performance.total_lessons_completed
    total_lessons = previous_lessons + 1
    previous_average = performance.average_quiz_score
    new_average = clamp_score(
        (previous_average * previous_lessons + score) / total_lessons
    )

    # 3. Strong / weak topics
    strong, weak = _update_topics(
        performance.strong_topics, performance.weak_topics, topic or "", score
    )

    # 4. Recent score window
    recent = (performance.recent_quiz_scores + (score,))[-settings.rolling_window:]

    # 5. Trend
    updated = replace(
        updated,
        average_quiz_score=new_average,
        total_lessons_completed=total_lessons,
        strong_topics=strong,
        weak_topics=weak,
        recent_quiz_scores=recent,
        trend=_trend(previous_average, new_average),
    )

    # 6. Difficulty
    decision = decide_difficulty(updated)
    updated = replace(
        updated,
        current_difficulty=decision.difficulty,
        difficulty_change_reason=decision.reason,
        last_difficulty_change_direction=decision.direction,
    )

    # 7. Standing
    standing = calculate_standing(updated, streak, completion_ratio)
    updated = replace(
        updated,
        tier_score=standing.tier_score,
        learner_tier=standing.learner_tier,
        streak_health=standing.streak_health,
    )

    logger.debug(
        f"Quiz {score}% on '{topic}' ({modality}): average {previous_average} -> "
        f"{new_average}, difficulty {decision.difficulty}, tier {standing.learner_tier}"
    )
    return updated


def apply_quiz_result(performance: PerformanceHistory, result: QuizResult) -> PerformanceHistory:
    """apply_quiz() taking a QuizResult record."""
    return apply_quiz(
        performance,
        result.score,
        result.modality,
        result.topic,
        streak=result.streak,
        completion_ratio=result.completion_ratio,
    )


@dataclass(frozen=True)
class AdaptiveStatus:
    """What a lesson screen shows about the learner's adaptive state."""

    difficulty: Difficulty
    learner_tier: LearnerTier
    streak_health: StreakHealth
    trend: Trend
    reason: str
    tier_score: int

    @classmethod
    def from_performance(cls, performance: PerformanceHistory) -> AdaptiveStatus:
        return cls(
            difficulty=performance.current_difficulty,
            learner_tier=performance.learner_tier,
            streak_health=performance.streak_health,
            trend=performance.trend,
            reason=performance.difficulty_change_reason,
            tier_score=performance.tier_score,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "difficulty": self.difficulty,
            "learnerTier": self.learner_tier,
            "streakHealth": self.streak_health,
            "trend": self.trend,
            "reason": self.reason,
            "tierScore": self.tier_score,
        }


def difficulty_change_hint(previous: PerformanceHistory, updated: PerformanceHistory) -> str:
    """
    One-line notice after a quiz: the level change if any, else the stored reason.
    """
    if previous.current_difficulty != updated.current_difficulty:
        return (
            f"Adaptive update: difficulty moved from {previous.current_difficulty} "
            f"to {updated.current_difficulty}."
        )
    return updated.difficulty_change_reason
