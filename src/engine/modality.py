"""
Modality ranking: stated preference combined with measured performance.
"""

from __future__ import annotations

from loguru import logger

from ..config import config
from ..models.learning_profile import MODALITIES, LearningProfile, Modality, PerformanceHistory


def modality_affinity(
    profile: LearningProfile,
    performance: PerformanceHistory,
) -> dict[Modality, float]:
    """
    Affinity score per modality.

    Measured score contributes 60%; a modality the learner picked at
    onboarding gets a flat 40-point bonus (40% of a perfect 100).
    """
    settings = config.adaptive
    preferred = set(profile.learning_styles)
    scores = {}
    for modality in MODALITIES:
        score = performance.modality_score(modality) * settings.performance_weight
        if modality in preferred:
            score += settings.preference_bonus
        scores[modality] = score
    return scores


def rank_modalities(
    profile: LearningProfile,
    performance: PerformanceHistory,
) -> list[Modality]:
    """
    Order all four modalities from highest to lowest affinity.

    Ties keep declaration order (visual, reading, handson, listening)
    because sorted() is stable.

    Args:
        profile: Learner profile (learning_styles may be empty)
        performance: Current performance snapshot

    Returns:
        Permutation of the four modalities, best first
    """
    scores = modality_affinity(profile, performance)
    ranking = sorted(MODALITIES, key=lambda m: scores[m], reverse=True)
    logger.debug(f"Modality ranking: {ranking} ({scores})")
    return ranking
