"""
Unit tests for tier score, learner tier and streak health.
"""

import pytest

from src.engine.standing import (
    calculate_standing,
    calculate_tier_score,
    completion_bonus,
    demote_tier,
    streak_health,
    tier_for_score,
)
from src.models.learning_profile import PerformanceHistory


@pytest.fixture
def mid_performance():
    """Intermediate learner: average 80, modality mean 75, 10 lessons."""
    return PerformanceHistory(
        visual_score=60,
        reading_score=70,
        handson_score=80,
        listening_score=90,
        average_quiz_score=80,
        total_lessons_completed=10,
        current_difficulty="intermediate",
    )


class TestTierScore:
    """Test calculate_tier_score()."""

    def test_weighted_formula(self, mid_performance):
        """Test the full weighted sum divided by 1.18."""
        # 36 + 18.75 + 6 + 5.4 + 8 + 2 = 76.15 -> 64.53
        assert calculate_tier_score(mid_performance, streak=3, completion_ratio=0.5) == 65

    def test_low_completion_penalty(self, mid_performance):
        """Test the -8 completion penalty."""
        # 76.15 - 10 = 66.15 -> 56.06
        assert calculate_tier_score(mid_performance, streak=3, completion_ratio=0.2) == 56

    def test_missing_completion_counts_as_complete(self):
        """Test that no completion ratio means 1.0."""
        performance = PerformanceHistory()
        assert calculate_tier_score(performance) == calculate_tier_score(performance, 0, 1.0)
        # 12.5 + 2 + 8 = 22.5 -> 19.07
        assert calculate_tier_score(performance) == 19

    def test_all_zero_inputs(self):
        """Test a learner with no measured performance at all."""
        performance = PerformanceHistory(
            visual_score=0, reading_score=0, handson_score=0, listening_score=0
        )
        # 2 + 8 = 10 -> 8.47
        assert calculate_tier_score(performance, streak=0) == 8

    def test_clamped_to_100(self):
        """Test that a maxed-out learner scores exactly 100."""
        performance = PerformanceHistory(
            visual_score=100,
            reading_score=100,
            handson_score=100,
            listening_score=100,
            average_quiz_score=100,
            total_lessons_completed=40,
            current_difficulty="advanced",
        )
        assert calculate_tier_score(performance, streak=30) == 100

    def test_negative_streak_treated_as_zero(self, mid_performance):
        """Test that the streak bonus never goes negative."""
        assert calculate_tier_score(mid_performance, streak=-4) == calculate_tier_score(
            mid_performance, streak=0
        )

    def test_completion_bonus_bands(self):
        """Test completion bonus cut-offs."""
        assert completion_bonus(0.65) == 8
        assert completion_bonus(0.64) == 2
        assert completion_bonus(0.35) == 2
        assert completion_bonus(0.34) == -8


class TestClassification:
    """Test tier and streak classification."""

    def test_tier_for_score(self):
        """Test tier cut-offs."""
        assert tier_for_score(85) == "legend"
        assert tier_for_score(84) == "pro"
        assert tier_for_score(70) == "pro"
        assert tier_for_score(69) == "intermediate"
        assert tier_for_score(50) == "intermediate"
        assert tier_for_score(49) == "beginner"

    def test_streak_health(self):
        """Test streak health cut-offs."""
        assert streak_health(7) == "strong"
        assert streak_health(6) == "warning"
        assert streak_health(3) == "warning"
        assert streak_health(2) == "critical"
        assert streak_health(0) == "critical"

    def test_calculate_standing(self, mid_performance):
        """Test the combined standing record."""
        standing = calculate_standing(mid_performance, streak=8, completion_ratio=1.0)
        assert standing.learner_tier == tier_for_score(standing.tier_score)
        assert standing.streak_health == "strong"
        assert standing.to_dict()["tierScore"] == standing.tier_score


class TestDemoteTier:
    """Test demote_tier()."""

    def test_one_step_down(self):
        """Test demotion by one tier."""
        assert demote_tier("legend") == "pro"
        assert demote_tier("intermediate") == "beginner"

    def test_floor_and_unknown(self):
        """Test floor at beginner and unknown tiers."""
        assert demote_tier("beginner") == "beginner"
        assert demote_tier(None) == "beginner"
        assert demote_tier("mythic") == "beginner"
