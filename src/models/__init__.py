"""
Data models for the adaptive learning engine.

This module contains core data models:
- LearningProfile: Onboarding profile (age, styles, interests, language)
- PerformanceHistory: Measured performance threaded through quiz updates
- QuizResult: A completed quiz, the input of a performance update
"""

from .learning_profile import (
    DIFFICULTY_ORDER,
    MODALITIES,
    TIER_ORDER,
    LearningProfile,
    PerformanceHistory,
    default_performance_history,
)
from .quiz_result import QuizResult, completion_ratio, xp_for_quiz

__all__ = [
    "DIFFICULTY_ORDER",
    "MODALITIES",
    "TIER_ORDER",
    "LearningProfile",
    "PerformanceHistory",
    "default_performance_history",
    "QuizResult",
    "completion_ratio",
    "xp_for_quiz",
]
