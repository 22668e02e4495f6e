"""
Utility modules for the adaptive learning engine.

This module contains utility functions:
- validation: JSON Schema validation of stored snapshots with auto-repair
"""

from .validation import (
    ValidationResult,
    SchemaValidator,
    LearningProfileValidator,
    PerformanceHistoryValidator,
    validate_learning_profile,
    validate_performance_history,
)

__all__ = [
    "ValidationResult",
    "SchemaValidator",
    "LearningProfileValidator",
    "PerformanceHistoryValidator",
    "validate_learning_profile",
    "validate_performance_history",
]
