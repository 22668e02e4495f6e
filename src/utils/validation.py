"""
Schema validation for learner snapshots entering the engine.

Provides JSON Schema validation with clear error messages and automatic
repair for the shapes stored by hosting applications.

Features:
- Deep copy to prevent mutations
- Type coercion (numeric strings to numbers)
- Removal of unknown keys
- Default-filling for snapshots written by older releases
- Score clamping and strong/weak topic disjointness
- Transparent repair tracking
"""

import json
import math
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError
from loguru import logger

from ..config import config
from ..models.learning_profile import PerformanceHistory, clamp_score, round_half_up


class ValidationResult:
    """
    Result of a validation attempt.

    Attributes:
        valid: Whether data passed validation
        errors: List of error messages
        data: The validated data (may be modified if repair was attempted)
        repairs: List of repairs applied (for transparency)
    """

    def __init__(
        self,
        valid: bool,
        errors: list[str],
        data: Any = None,
        repairs: Optional[list[str]] = None,
    ):
        self.valid = valid
        self.errors = errors
        self.data = data
        self.repairs = repairs or []

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.valid:
            msg = "✓ Validation passed"
            if self.repairs:
                msg += f" (with {len(self.repairs)} repair(s))"
            return msg
        return f"✗ Validation failed with {len(self.errors)} error(s):\n" + "\n".join(
            f"  - {error}" for error in self.errors
        )


class SchemaValidator:
    """
    JSON Schema validator with auto-repair capabilities.

    Usage:
        validator = SchemaValidator("path/to/schema.json")
        result = validator.validate(data)
        if result:
            print("Valid!")
            print("Repairs applied:", result.repairs)
        else:
            print(result.errors)
    """

    def __init__(self, schema_path: Path | str):
        """
        Initialize validator with a schema file.

        Args:
            schema_path: Path to JSON Schema file

        Raises:
            FileNotFoundError: If the schema file is missing
        """
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r", encoding="utf-8") as f:
            self.schema = json.load(f)
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: dict, auto_repair: bool = False) -> ValidationResult:
        """
        Validate data against schema.

        Args:
            data: Data to validate
            auto_repair: If True, attempt to fix common validation errors

        Returns:
            ValidationResult with validation status and any errors
        """
        if not isinstance(data, dict):
            if not auto_repair:
                return ValidationResult(
                    valid=False,
                    errors=[f"At 'root': expected an object, got {type(data).__name__}"],
                    data=data,
                )
            data = {}

        errors = [self._format_error(error) for error in self.validator.iter_errors(data)]

        if errors:
            if auto_repair:
                repaired_data, repairs = self._attempt_repair(data, errors)
                result = self.validate(repaired_data, auto_repair=False)
                result.repairs = repairs
                if repairs:
                    logger.warning(
                        f"Repaired {self.schema_path.name} data: {len(repairs)} change(s)"
                    )
                return result
            return ValidationResult(valid=False, errors=errors, data=data)

        return ValidationResult(valid=True, errors=[], data=data)

    def _format_error(self, error: ValidationError) -> str:
        """
        Convert ValidationError to human-readable message with details.

        Args:
            error: jsonschema ValidationError

        Returns:
            Formatted error message with validator and schema path
        """
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        validator_name = getattr(error, "validator", "unknown")
        schema_path = "/".join(str(p) for p in error.schema_path)
        return (
            f"At '{path}': {error.message} "
            f"[validator={validator_name}, schema_path=/{schema_path}]"
        )

    def _attempt_repair(self, data: dict, errors: list[str]) -> tuple[dict, list[str]]:
        """
        Attempt to automatically fix common validation errors.

        Args:
            data: Original data
            errors: List of validation errors

        Returns:
            Tuple of (repaired data, list of repairs applied)
        """
        # Deep copy to prevent mutation of original
        repaired = deepcopy(data)
        repairs = []

        self._strip_additional_props(repaired, repairs)
        self._coerce_types(repaired, repairs)

        return repaired, repairs

    def _strip_additional_props(self, obj: dict, repairs: list[str]):
        """Remove top-level keys not allowed by schema (additionalProperties: false)."""
        if self.schema.get("additionalProperties") is not False:
            return
        allowed = set(self.schema.get("properties", {}).keys())
        for key in [k for k in list(obj.keys()) if k not in allowed]:
            obj.pop(key, None)
            repairs.append(f"Removed unknown key '{key}'")

    def _coerce_types(self, data: dict, repairs: list[str]):
        """
        Coerce numeric strings for integer/number properties (e.g. "85" → 85).

        Args:
            data: Data to coerce
            repairs: List to append repair messages
        """
        for key, subschema in self.schema.get("properties", {}).items():
            value = data.get(key)
            if not isinstance(value, str):
                continue
            expected = self._resolve(subschema).get("type")
            if expected not in ("integer", "number"):
                continue
            try:
                number = float(value)
            except ValueError:
                continue
            if not math.isfinite(number):
                continue
            coerced = round_half_up(number) if expected == "integer" else number
            data[key] = coerced
            repairs.append(f"Coerced {key}: '{value}' → {coerced}")

    def _resolve(self, subschema: dict) -> dict:
        """Follow a local '#/definitions/...' reference."""
        ref = subschema.get("$ref", "")
        if not ref.startswith("#/definitions/"):
            return subschema
        return self.schema.get("definitions", {}).get(ref.split("/")[-1], {})


class LearningProfileValidator(SchemaValidator):
    """
    Validator for learning profile data.

    Repairs:
    - Unknown keys removed, numeric age strings coerced
    - Unknown learning styles dropped, duplicate interests removed
    - Missing optional collections and language defaulted
    """

    def __init__(self, schema_path: Optional[Path] = None):
        """Initialize validator with learning profile schema."""
        super().__init__(schema_path or config.paths.learning_profile_schema)

    def _attempt_repair(self, data: dict, errors: list[str]) -> tuple[dict, list[str]]:
        repaired, repairs = super()._attempt_repair(data, errors)
        defaults = {
            "country": "",
            "gradeLevel": "",
            "learningStyles": [],
            "interests": [],
            "language": "English",
        }
        for key, value in defaults.items():
            if key not in repaired or repaired[key] is None:
                repaired[key] = value
                repairs.append(f"Added missing '{key}' = {value!r}")

        for key in ("learningStyles", "interests"):
            if not isinstance(repaired[key], list):
                repairs.append(f"Replaced non-list {key} {repaired[key]!r} with []")
                repaired[key] = []

        allowed_styles = self.schema["properties"]["learningStyles"]["items"]["enum"]
        styles = repaired.get("learningStyles")
        if isinstance(styles, list):
            kept = list(dict.fromkeys(s for s in styles if s in allowed_styles))
            if kept != styles:
                repaired["learningStyles"] = kept
                repairs.append(f"Filtered learningStyles: {styles} → {kept}")

        interests = repaired.get("interests")
        if isinstance(interests, list):
            kept = list(dict.fromkeys(i for i in interests if isinstance(i, str) and i))
            if kept != interests:
                repaired["interests"] = kept
                repairs.append(f"Deduplicated interests: {interests} → {kept}")

        level = repaired.get("englishLevel")
        allowed_levels = self.schema["properties"]["englishLevel"]["enum"]
        if "englishLevel" in repaired and level not in allowed_levels:
            repaired.pop("englishLevel")
            repairs.append(f"Removed unknown englishLevel '{level}'")

        return repaired, repairs


class PerformanceHistoryValidator(SchemaValidator):
    """
    Validator for performance history snapshots.

    Snapshots written before the standing fields existed lack
    recentQuizScores, tierScore, learnerTier, trend, streakHealth,
    difficultyChangeReason and lastDifficultyChangeDirection. Auto-repair
    fills them with baseline defaults so the engine sees a single shape.

    Additional (non-schema) check:
    - strongTopics and weakTopics must not share an entry
    """

    SCORE_KEYS = (
        "visualScore",
        "readingScore",
        "handsonScore",
        "listeningScore",
        "averageQuizScore",
        "tierScore",
    )

    def __init__(self, schema_path: Optional[Path] = None):
        """Initialize validator with performance history schema."""
        super().__init__(schema_path or config.paths.performance_history_schema)

    def validate(self, data: dict, auto_repair: bool = False) -> ValidationResult:
        """
        Validate a performance snapshot with the disjoint-topics check.

        Args:
            data: Performance history data (camelCase keys)
            auto_repair: Whether to attempt automatic repairs

        Returns:
            ValidationResult
        """
        result = super().validate(data, auto_repair=auto_repair)
        overlap = self._topic_overlap(result.data)

        if overlap and auto_repair:
            # Schema-valid but inconsistent: repair runs even without schema errors
            repaired, repairs = self._attempt_repair(result.data, [])
            result = super().validate(repaired, auto_repair=False)
            result.repairs = repairs
            overlap = self._topic_overlap(result.data)

        if not overlap:
            return result

        return ValidationResult(
            valid=False,
            errors=result.errors + [f"Topics listed as both strong and weak: {sorted(overlap)}"],
            data=result.data,
            repairs=result.repairs,
        )

    @staticmethod
    def _topic_overlap(data: Any) -> set:
        if not isinstance(data, dict):
            return set()
        strong = data.get("strongTopics")
        weak = data.get("weakTopics")
        if not isinstance(strong, list) or not isinstance(weak, list):
            return set()
        return {t for t in strong if isinstance(t, str)} & {t for t in weak if isinstance(t, str)}

    def _attempt_repair(self, data: dict, errors: list[str]) -> tuple[dict, list[str]]:
        repaired, repairs = super()._attempt_repair(data, errors)

        baseline = PerformanceHistory().to_dict()
        for key, value in baseline.items():
            if key not in repaired or repaired[key] is None:
                repaired[key] = value
                repairs.append(f"Added missing '{key}' = {value!r}")

        for key in self.SCORE_KEYS:
            value = repaired.get(key)
            fixed = clamp_score(value, baseline[key])
            if value != fixed:
                repaired[key] = fixed
                repairs.append(f"Clamped {key}: {value!r} → {fixed}")

        # Remaining fields go through the same normalization the engine applies
        normalized = PerformanceHistory.from_dict(repaired, config.adaptive.topic_memory).to_dict()
        for key, value in normalized.items():
            if repaired.get(key) != value:
                repairs.append(f"Normalized {key}: {repaired.get(key)!r} → {value!r}")
                repaired[key] = value

        return repaired, repairs


# Convenience functions for quick validation
def validate_learning_profile(data: dict, auto_repair: bool = False) -> ValidationResult:
    """
    Quick validation of learning profile data.

    Args:
        data: Learning profile dictionary to validate
        auto_repair: Whether to attempt automatic repairs

    Returns:
        ValidationResult

    Example:
        result = validate_learning_profile(profile_dict)
        if result:
            profile = LearningProfile.from_dict(result.data)
        else:
            print("Errors:", result.errors)
    """
    validator = LearningProfileValidator()
    return validator.validate(data, auto_repair=auto_repair)


def validate_performance_history(data: dict, auto_repair: bool = True) -> ValidationResult:
    """
    Quick validation of a stored performance snapshot.

    Args:
        data: Performance history dictionary to validate
        auto_repair: Whether to attempt automatic repairs (default True, so
            older snapshots are upgraded)

    Returns:
        ValidationResult
    """
    validator = PerformanceHistoryValidator()
    return validator.validate(data, auto_repair=auto_repair)
