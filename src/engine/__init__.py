"""
Adaptive learning engine: pure decision functions over learner snapshots.

This module contains:
- Modality ranking (preference + measured performance)
- Difficulty adjustment with hysteresis
- Standing (tier score, learner tier, streak health)
- Topic recommendations over a static taxonomy
- The post-quiz performance reducer
- Course prompt assembly for the content provider

No function here performs I/O or keeps state between calls.
"""

from .difficulty import DifficultyDecision, decide_difficulty, next_difficulty, rolling_average
from .modality import modality_affinity, rank_modalities
from .normalizer import normalize_topic_text
from .prompts import build_course_prompt
from .recommender import TopicRecommendation, recommend_topics, resolve_category
from .rewards import DAILY_REWARDS, DailyReward, daily_reward
from .standing import (
    Standing,
    calculate_standing,
    calculate_tier_score,
    demote_tier,
    streak_health,
    tier_for_score,
)
from .taxonomy import DEFAULT_TAXONOMY, TopicCategory, TopicTaxonomy
from .updater import (
    AdaptiveStatus,
    apply_quiz,
    apply_quiz_result,
    difficulty_change_hint,
)

__all__ = [
    # Modality
    "modality_affinity",
    "rank_modalities",
    # Difficulty
    "DifficultyDecision",
    "decide_difficulty",
    "next_difficulty",
    "rolling_average",
    # Standing
    "Standing",
    "calculate_standing",
    "calculate_tier_score",
    "demote_tier",
    "streak_health",
    "tier_for_score",
    # Recommendations
    "TopicRecommendation",
    "recommend_topics",
    "resolve_category",
    "normalize_topic_text",
    "DEFAULT_TAXONOMY",
    "TopicCategory",
    "TopicTaxonomy",
    # Updates
    "AdaptiveStatus",
    "apply_quiz",
    "apply_quiz_result",
    "difficulty_change_hint",
    # Prompt
    "build_course_prompt",
    # Rewards
    "DAILY_REWARDS",
    "DailyReward",
    "daily_reward",
]
