"""
Unit tests for QuizResult and quiz bookkeeping helpers.
"""

import unittest

from src.models.quiz_result import QuizResult, completion_ratio, xp_for_quiz


class TestQuizResult(unittest.TestCase):
    """Test QuizResult dataclass."""

    def test_quiz_result_creation(self):
        """Test creating a QuizResult with defaults."""
        result = QuizResult(score=88, modality="visual", topic="Volcanoes")
        self.assertEqual(result.streak, 0)
        self.assertIsNone(result.completion_ratio)

    def test_quiz_result_to_dict(self):
        """Test converting QuizResult to dictionary."""
        result = QuizResult(score=104.2, modality="reading", topic="Fractions", streak=4)
        data = result.to_dict()
        self.assertIsInstance(data, dict)
        self.assertEqual(data["score"], 100)
        self.assertEqual(data["modality"], "reading")
        self.assertEqual(data["streak"], 4)


class TestCompletionRatio(unittest.TestCase):
    """Test completion_ratio()."""

    def test_distinct_lessons_counted_once(self):
        """Test that repeated lesson ids count once."""
        self.assertEqual(completion_ratio(["lesson_1", "lesson_2", "lesson_2"], 4), 0.5)

    def test_empty_course(self):
        """Test a course without lessons."""
        self.assertEqual(completion_ratio(["lesson_1"], 0), 0.0)

    def test_ratio_capped_at_one(self):
        """Test that stale ids beyond the lesson count do not exceed 1."""
        self.assertEqual(completion_ratio(["a", "b", "c"], 2), 1.0)


class TestXpForQuiz(unittest.TestCase):
    """Test xp_for_quiz()."""

    def test_xp_values(self):
        """Test base XP plus one per full 10%."""
        self.assertEqual(xp_for_quiz(0), 10)
        self.assertEqual(xp_for_quiz(95), 19)
        self.assertEqual(xp_for_quiz(100), 20)

    def test_xp_out_of_range_scores(self):
        """Test that scores are clamped before XP is computed."""
        self.assertEqual(xp_for_quiz(-20), 10)
        self.assertEqual(xp_for_quiz(250), 20)


if __name__ == "__main__":
    unittest.main()
