"""
Unit tests for difficulty adjustment.

Tests:
- Minimum sample before adapting
- Step up / step down thresholds and the hysteresis band
- Floor and ceiling reasons
- Fallback to the lifetime average when the recent window is short
"""

import dataclasses

from src.config import config
from src.engine.difficulty import decide_difficulty, next_difficulty, rolling_average
from src.models.learning_profile import INSUFFICIENT_SAMPLE_REASON, PerformanceHistory


def snapshot(lessons=5, recent=(), average=0, difficulty="beginner"):
    return PerformanceHistory(
        total_lessons_completed=lessons,
        recent_quiz_scores=recent,
        average_quiz_score=average,
        current_difficulty=difficulty,
    )


class TestRollingAverage:
    """Test rolling_average()."""

    def test_uses_recent_window(self):
        """Test mean of recent scores, rounded half up."""
        assert rolling_average(snapshot(recent=(84, 85, 85))) == 85
        assert rolling_average(snapshot(recent=(84, 84, 85))) == 84

    def test_short_window_falls_back_to_lifetime_average(self):
        """Test that fewer than 3 recent scores use the lifetime average."""
        assert rolling_average(snapshot(recent=(100, 100), average=40)) == 40


class TestDecideDifficulty:
    """Test decide_difficulty()."""

    def test_insufficient_sample(self):
        """Test that fewer than 3 lessons never change difficulty."""
        decision = decide_difficulty(snapshot(lessons=2, recent=(100, 100, 100)))
        assert decision.difficulty == "beginner"
        assert decision.direction == "stable"
        assert decision.reason == INSUFFICIENT_SAMPLE_REASON

    def test_step_up(self):
        """Test stepping up one level at an 85 average."""
        decision = decide_difficulty(snapshot(recent=(90, 85, 80)))
        assert decision.difficulty == "intermediate"
        assert decision.direction == "up"
        assert decision.reason == "Average 85% in recent quizzes. Difficulty increased to Intermediate."

    def test_step_up_is_single_level(self):
        """Test that a perfect average still moves only one step."""
        assert next_difficulty(snapshot(recent=(100, 100, 100))) == "intermediate"

    def test_step_down(self):
        """Test stepping down when the lifetime average is used."""
        decision = decide_difficulty(
            snapshot(lessons=10, recent=(100, 100), average=40, difficulty="intermediate")
        )
        assert decision.difficulty == "beginner"
        assert decision.direction == "down"
        assert decision.reason == (
            "Average 40% in recent quizzes. Difficulty lowered to Beginner for support."
        )

    def test_hysteresis_band_holds(self):
        """Test that averages in [55, 85) keep the level."""
        for recent in ((55, 55, 55), (84, 84, 85)):
            decision = decide_difficulty(snapshot(recent=recent, difficulty="intermediate"))
            assert decision.difficulty == "intermediate"
            assert decision.direction == "stable"
            assert decision.reason.endswith("Difficulty remains balanced.")

    def test_ceiling(self):
        """Test that advanced stays advanced on a high average."""
        decision = decide_difficulty(snapshot(recent=(95, 95, 95), difficulty="advanced"))
        assert decision.difficulty == "advanced"
        assert decision.direction == "stable"
        assert decision.reason == "Average 95% in recent quizzes. Staying at Advanced."

    def test_floor(self):
        """Test that beginner stays beginner on a low average."""
        decision = decide_difficulty(snapshot(recent=(30, 30, 30)))
        assert decision.difficulty == "beginner"
        assert decision.direction == "stable"
        assert decision.reason == (
            "Average 30% in recent quizzes. Staying at Beginner for stronger foundations."
        )

    def test_to_dict(self):
        """Test decision export."""
        data = decide_difficulty(snapshot(recent=(90, 90, 90))).to_dict()
        assert data == {
            "difficulty": "intermediate",
            "reason": "Average 90% in recent quizzes. Difficulty increased to Intermediate.",
            "direction": "up",
        }


class TestWindowSettings:
    """Test the window length setting apart from the lesson minimum."""

    def test_min_window_scores_independent(self, monkeypatch):
        """Test that a shorter minimum window uses two recent scores."""
        settings = dataclasses.replace(config.adaptive, min_window_scores=2)
        monkeypatch.setattr(config, "adaptive", settings)

        assert rolling_average(snapshot(recent=(100, 100), average=40)) == 100
        decision = decide_difficulty(snapshot(lessons=2, recent=(100, 100), average=40))
        assert decision.reason == INSUFFICIENT_SAMPLE_REASON
