"""
Unit tests for course prompt assembly.
"""

from src.engine.prompts import build_course_prompt, language_instructions
from src.models.learning_profile import LearningProfile, PerformanceHistory


class TestBuildCoursePrompt:
    """Test build_course_prompt()."""

    def test_new_learner_prompt(self, space_profile, baseline_performance):
        """Test modality, difficulty and age fragments for a new learner."""
        prompt = build_course_prompt(space_profile, baseline_performance, "  Black Holes ")

        assert 'COURSE TOPIC: "Black Holes"' in prompt
        assert "DIFFICULTY LEVEL: beginner" in prompt
        assert "Primary modality: visual: Include many diagrams" in prompt
        assert "Secondary modality: reading: Provide detailed written explanations" in prompt
        assert "The student is 11 years old, in Grade 6 (Kenya)." in prompt
        assert "Include fun facts" in prompt
        assert "current performance" not in prompt
        assert '"primaryModality": "visual"' in prompt
        assert '"contentType": "visual"' in prompt

    def test_prompt_is_deterministic(self, space_profile, baseline_performance):
        """Test identical inputs produce identical text."""
        first = build_course_prompt(space_profile, baseline_performance, "Mars Exploration")
        second = build_course_prompt(space_profile, baseline_performance, "Mars Exploration")
        assert first == second

    def test_performance_context(self, space_profile):
        """Test the performance block once lessons are completed."""
        performance = PerformanceHistory(
            total_lessons_completed=4,
            average_quiz_score=62,
            strong_topics=("volcanoes",),
            weak_topics=("fractions",),
        )
        prompt = build_course_prompt(space_profile, performance, "Ecosystems")

        assert "The student's current performance:" in prompt
        assert "- Lessons completed: 4" in prompt
        assert "- Strong in: volcanoes" in prompt
        assert "- Needs improvement in: fractions" in prompt

    def test_uses_decided_difficulty(self, space_profile):
        """Test the prompt carries the next difficulty, not the stored one."""
        performance = PerformanceHistory(
            total_lessons_completed=6,
            average_quiz_score=90,
            recent_quiz_scores=(90, 90, 90),
        )
        prompt = build_course_prompt(space_profile, performance, "Stars & Galaxies")

        assert "DIFFICULTY LEVEL: intermediate" in prompt
        assert '"difficulty": "intermediate"' in prompt
        assert "(balanced difficulty)" in prompt

    def test_age_bands(self, baseline_performance):
        """Test the youngest and adult age fragments."""
        young = build_course_prompt(LearningProfile(age=7), baseline_performance, "Dinosaurs")
        adult = build_course_prompt(LearningProfile(age=30), baseline_performance, "Dinosaurs")
        assert "lots of emoji" in young
        assert "mature, academic language" in adult


class TestLanguageInstructions:
    """Test language_instructions()."""

    def test_beginner_english_support(self):
        """Test translation support for non-English courses."""
        profile = LearningProfile(language="Spanish", english_level="beginner")
        text = language_instructions(profile)
        assert text.startswith("Write the course in Spanish.")
        assert "Spanish translation in parentheses" in text

    def test_intermediate_english_support(self):
        """Test vocabulary support for intermediate English."""
        profile = LearningProfile(language="French", english_level="intermediate")
        assert "explain complex vocabulary" in language_instructions(profile)

    def test_english_course_has_no_extra(self):
        """Test English courses ignore English level."""
        profile = LearningProfile(language="English", english_level="beginner")
        assert language_instructions(profile) == "Write the course in English."
