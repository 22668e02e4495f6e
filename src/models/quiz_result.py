"""
Quiz Result - the event that drives a performance update.

A hosting application records one QuizResult per first completion of a
lesson quiz and hands it to the performance updater.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from .learning_profile import clamp, clamp_score


@dataclass(frozen=True)
class QuizResult:
    """
    Outcome of one lesson quiz.

    Attributes:
        score: Quiz score (0-100)
        modality: Modality the lesson was delivered in
        topic: Course topic the quiz belongs to (free text)
        streak: Learner's current daily streak
        completion_ratio: Share of the course's lessons completed (None = 1.0)
    """
    score: float
    modality: str
    topic: str
    streak: int = 0
    completion_ratio: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": clamp_score(self.score),
            "modality": self.modality,
            "topic": self.topic,
            "streak": self.streak,
            "completion_ratio": self.completion_ratio,
        }


def completion_ratio(completed_lesson_ids: Iterable[str], total_lessons: int) -> float:
    """
    Share of a course's lessons the learner has finished.

    Args:
        completed_lesson_ids: Lesson ids finished so far (duplicates allowed)
        total_lessons: Number of lessons in the course

    Returns:
        Ratio in [0, 1]; 0.0 when the course has no lessons

    Example:
        >>> completion_ratio(["lesson_1", "lesson_2", "lesson_2"], 4)
        0.5
    """
    if total_lessons <= 0:
        return 0.0
    distinct = len(set(completed_lesson_ids))
    return clamp(distinct / total_lessons, 0.0, 1.0)


def xp_for_quiz(score: float) -> int:
    """XP awarded for a first quiz completion: 10 plus one per full 10%."""
    return 10 + int(math.floor(clamp_score(score) / 10))
