"""
Shared pytest fixtures and configuration for adaptive engine tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import pytest
import sys
from pathlib import Path

# Make the project root importable so tests can use `src.*`
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.models.learning_profile import LearningProfile, PerformanceHistory


@pytest.fixture
def baseline_performance():
    """
    Fixture providing the onboarding performance snapshot.

    Returns:
        PerformanceHistory: all modality scores 50, nothing completed
    """
    return PerformanceHistory()


@pytest.fixture
def space_profile():
    """
    Fixture providing a profile interested in space, preferring visual content.

    Returns:
        LearningProfile
    """
    return LearningProfile(
        age=11,
        country="Kenya",
        grade_level="Grade 6",
        learning_styles=("visual",),
        interests=("space",),
        language="English",
    )


@pytest.fixture
def legacy_performance_dict():
    """
    Fixture providing a snapshot stored before the standing fields existed.

    Returns:
        dict: camelCase snapshot without tier/trend/streak/recent-score fields
    """
    return {
        "visualScore": 64,
        "readingScore": 50,
        "handsonScore": 41,
        "listeningScore": 50,
        "averageQuizScore": 72,
        "totalLessonsCompleted": 6,
        "currentDifficulty": "intermediate",
        "strongTopics": ["volcanoes"],
        "weakTopics": ["fractions"],
    }


@pytest.fixture
def valid_profile_dict():
    """
    Fixture providing a stored learning profile that passes validation.

    Returns:
        dict
    """
    return {
        "age": 14,
        "country": "Mexico",
        "gradeLevel": "Grade 9",
        "learningStyles": ["handson", "reading"],
        "interests": ["science", "music"],
        "language": "Spanish",
        "englishLevel": "intermediate",
    }


@pytest.fixture
def temp_schema_file(tmp_path):
    """
    Fixture providing a temporary schema file for testing.

    Args:
        tmp_path: pytest's tmp_path fixture

    Returns:
        Path: Path to temporary schema file
    """
    import json

    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "additionalProperties": False,
        "properties": {"count": {"type": "integer"}, "name": {"type": "string"}},
        "required": ["count"],
    }

    schema_file = tmp_path / "test.schema.json"
    with open(schema_file, "w") as f:
        json.dump(schema, f)

    return schema_file


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests in unit/ directory as unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Mark tests in integration/ directory as integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
