"""
Learning Profile and Performance History: the two snapshots the engine consumes.

This module provides:
- Closed vocabularies (modality, difficulty, tier, trend, streak health)
- Immutable LearningProfile and PerformanceHistory records
- Storage-shape conversion (camelCase dicts) with default-filling
- The onboarding baseline performance snapshot

Both records are frozen: engine functions return new values and never
mutate what the caller passed in.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace
from typing import Any, Iterable, Literal, Optional

from loguru import logger

from ..config import config


# Type aliases for clarity
Modality = Literal["visual", "reading", "handson", "listening"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
LearnerTier = Literal["beginner", "intermediate", "pro", "legend"]
Trend = Literal["up", "down", "stable"]
StreakHealth = Literal["strong", "warning", "critical"]
EnglishLevel = Literal["beginner", "intermediate", "advanced", "native"]

# Declaration order doubles as tie-break order and as the total order
MODALITIES: tuple[Modality, ...] = ("visual", "reading", "handson", "listening")
DIFFICULTY_ORDER: tuple[Difficulty, ...] = ("beginner", "intermediate", "advanced")
TIER_ORDER: tuple[LearnerTier, ...] = ("beginner", "intermediate", "pro", "legend")
TRENDS: tuple[Trend, ...] = ("up", "down", "stable")
STREAK_HEALTH_LEVELS: tuple[StreakHealth, ...] = ("strong", "warning", "critical")
ENGLISH_LEVELS: tuple[EnglishLevel, ...] = ("beginner", "intermediate", "advanced", "native")

INSUFFICIENT_SAMPLE_REASON = "Need more lessons before difficulty adapts."


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return min(high, max(low, value))


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves rounding up.

    Python's round() uses banker's rounding (round(2.5) == 2); stored scores
    were always produced with halves rounding up, so the engine does too.
    """
    return int(math.floor(value + 0.5))


def clamp_score(value: Any, default: int = 0) -> int:
    """Coerce value to an integer score in [0, 100]; infinities clamp to the bounds."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    if math.isinf(number):
        return 100 if number > 0 else 0
    return int(clamp(round_half_up(number), 0, 100))


def _count(value: Any, default: int = 0) -> int:
    """Coerce value to a non-negative integer count (default if not a finite number)."""
    try:
        return max(0, int(float(value)))
    except (TypeError, ValueError, OverflowError):
        return default


def _choice(value: Any, allowed: tuple, default: str) -> str:
    """Return value if it belongs to allowed, otherwise default."""
    return value if value in allowed else default


def _sequence(values: Any) -> tuple:
    """Tuple of the items of a list, tuple or set; anything else is empty."""
    if isinstance(values, (list, tuple, set, frozenset)):
        return tuple(values)
    return ()


def _strings(values: Optional[Iterable[Any]]) -> tuple[str, ...]:
    """Normalize an optional collection into a tuple of non-empty strings."""
    return tuple(str(v) for v in _sequence(values) if v is not None and str(v) != "")


@dataclass(frozen=True)
class LearningProfile:
    """
    Learner profile captured at onboarding.

    Attributes:
        age: Learner age in years
        country: Country name
        grade_level: Free-text grade (e.g. "Grade 5")
        learning_styles: Preferred modalities (non-exclusive)
        interests: Taxonomy category keys the learner picked
        language: Course language name (e.g. "English", "Spanish")
        english_level: Optional English proficiency for non-English courses
    """

    age: int = 10
    country: str = ""
    grade_level: str = ""
    learning_styles: tuple[Modality, ...] = ()
    interests: tuple[str, ...] = ()
    language: str = "English"
    english_level: Optional[EnglishLevel] = None

    def __post_init__(self):
        # Accept lists/sets from callers but store immutable, ordered tuples
        object.__setattr__(
            self,
            "learning_styles",
            tuple(dict.fromkeys(s for s in _strings(self.learning_styles) if s in MODALITIES)),
        )
        object.__setattr__(self, "interests", tuple(dict.fromkeys(_strings(self.interests))))

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> LearningProfile:
        """
        Build a profile from its stored (camelCase) shape.

        Missing fields take defaults; unknown modalities and English levels
        are dropped rather than rejected.
        """
        if not isinstance(data, dict):
            data = {}
        age = _count(data.get("age", 10), default=10)

        english_level = data.get("englishLevel")
        if english_level not in ENGLISH_LEVELS:
            english_level = None

        return cls(
            age=age,
            country=str(data.get("country") or ""),
            grade_level=str(data.get("gradeLevel") or ""),
            learning_styles=_strings(data.get("learningStyles")),
            interests=_strings(data.get("interests")),
            language=str(data.get("language") or "English"),
            english_level=english_level,
        )

    def to_dict(self) -> dict:
        """Export profile in its stored (camelCase) shape."""
        data = {
            "age": self.age,
            "country": self.country,
            "gradeLevel": self.grade_level,
            "learningStyles": list(self.learning_styles),
            "interests": list(self.interests),
            "language": self.language,
        }
        if self.english_level is not None:
            data["englishLevel"] = self.english_level
        return data


# camelCase storage key -> dataclass field
_PERFORMANCE_KEYS = {
    "visualScore": "visual_score",
    "readingScore": "reading_score",
    "handsonScore": "handson_score",
    "listeningScore": "listening_score",
    "averageQuizScore": "average_quiz_score",
    "totalLessonsCompleted": "total_lessons_completed",
    "currentDifficulty": "current_difficulty",
    "strongTopics": "strong_topics",
    "weakTopics": "weak_topics",
    "recentQuizScores": "recent_quiz_scores",
    "tierScore": "tier_score",
    "learnerTier": "learner_tier",
    "trend": "trend",
    "streakHealth": "streak_health",
    "difficultyChangeReason": "difficulty_change_reason",
    "lastDifficultyChangeDirection": "last_difficulty_change_direction",
}


# Score fields clamped on construction, with the value used for non-numbers
_SCORE_DEFAULTS = {
    "visual_score": 50,
    "reading_score": 50,
    "handson_score": 50,
    "listening_score": 50,
    "average_quiz_score": 0,
    "tier_score": 0,
}


@dataclass(frozen=True)
class PerformanceHistory:
    """
    Measured learner performance, threaded through one quiz at a time.

    Sequences are ordered most-recent-last. strong_topics and weak_topics
    never share an entry.
    """

    visual_score: int = 50
    reading_score: int = 50
    handson_score: int = 50
    listening_score: int = 50
    average_quiz_score: int = 0
    total_lessons_completed: int = 0
    current_difficulty: Difficulty = "beginner"
    strong_topics: tuple[str, ...] = ()
    weak_topics: tuple[str, ...] = ()
    recent_quiz_scores: tuple[int, ...] = ()
    tier_score: int = 0
    learner_tier: LearnerTier = "beginner"
    trend: Trend = "stable"
    streak_health: StreakHealth = "warning"
    difficulty_change_reason: str = INSUFFICIENT_SAMPLE_REASON
    last_difficulty_change_direction: Trend = "stable"

    def __post_init__(self):
        for name, default in _SCORE_DEFAULTS.items():
            object.__setattr__(self, name, clamp_score(getattr(self, name), default))
        object.__setattr__(
            self, "total_lessons_completed", _count(self.total_lessons_completed)
        )

        # A topic in both lists keeps only its weak membership
        weak = tuple(dict.fromkeys(_strings(self.weak_topics)))
        strong = tuple(t for t in dict.fromkeys(_strings(self.strong_topics)) if t not in weak)
        object.__setattr__(self, "weak_topics", weak)
        object.__setattr__(self, "strong_topics", strong)

        object.__setattr__(
            self,
            "recent_quiz_scores",
            tuple(clamp_score(s) for s in _sequence(self.recent_quiz_scores)),
        )

    def modality_score(self, modality: str) -> int:
        """Get the measured score for a modality (0 for unknown modalities)."""
        if modality not in MODALITIES:
            return 0
        return getattr(self, f"{modality}_score")

    def with_modality_score(self, modality: str, score: int) -> PerformanceHistory:
        """Return a copy with one modality score replaced (unknown modality: unchanged)."""
        if modality not in MODALITIES:
            return self
        return replace(self, **{f"{modality}_score": clamp_score(score)})

    @property
    def modality_scores(self) -> dict[str, int]:
        """All four modality scores keyed by modality."""
        return {m: self.modality_score(m) for m in MODALITIES}

    @classmethod
    def from_dict(
        cls, data: Optional[dict], topic_memory: Optional[int] = None
    ) -> PerformanceHistory:
        """
        Build a snapshot from its stored (camelCase) shape.

        Older stored snapshots lack recentQuizScores and the standing fields;
        those take baseline defaults here so the engine sees one shape only.
        Scores are clamped, unknown enum values fall back to defaults, and a
        topic listed as both strong and weak keeps only its weak membership.
        Fields of the wrong type are treated as missing.
        """
        if not isinstance(data, dict):
            data = {}
        if topic_memory is None:
            topic_memory = config.adaptive.topic_memory
        baseline = cls()

        def score(key: str, default: int) -> int:
            return clamp_score(data.get(key, default), default)

        lessons = _count(data.get("totalLessonsCompleted", 0))

        weak = tuple(dict.fromkeys(_strings(data.get("weakTopics"))))
        strong = tuple(
            t for t in dict.fromkeys(_strings(data.get("strongTopics"))) if t not in weak
        )
        if len(strong) != len(_strings(data.get("strongTopics"))):
            logger.debug("Dropped duplicate or conflicting strong topics on ingestion")

        recent = _sequence(data.get("recentQuizScores"))

        reason = data.get("difficultyChangeReason")

        return cls(
            visual_score=score("visualScore", baseline.visual_score),
            reading_score=score("readingScore", baseline.reading_score),
            handson_score=score("handsonScore", baseline.handson_score),
            listening_score=score("listeningScore", baseline.listening_score),
            average_quiz_score=score("averageQuizScore", baseline.average_quiz_score),
            total_lessons_completed=lessons,
            current_difficulty=_choice(
                data.get("currentDifficulty"), DIFFICULTY_ORDER, baseline.current_difficulty
            ),
            strong_topics=strong[-topic_memory:],
            weak_topics=weak[-topic_memory:],
            recent_quiz_scores=recent[-config.adaptive.rolling_window:],
            tier_score=score("tierScore", baseline.tier_score),
            learner_tier=_choice(data.get("learnerTier"), TIER_ORDER, baseline.learner_tier),
            trend=_choice(data.get("trend"), TRENDS, baseline.trend),
            streak_health=_choice(
                data.get("streakHealth"), STREAK_HEALTH_LEVELS, baseline.streak_health
            ),
            difficulty_change_reason=(
                str(reason) if reason else baseline.difficulty_change_reason
            ),
            last_difficulty_change_direction=_choice(
                data.get("lastDifficultyChangeDirection"),
                TRENDS,
                baseline.last_difficulty_change_direction,
            ),
        )

    def to_dict(self) -> dict:
        """Export snapshot in its stored (camelCase) shape."""
        fields = asdict(self)
        data = {}
        for key, name in _PERFORMANCE_KEYS.items():
            value = fields[name]
            data[key] = list(value) if isinstance(value, tuple) else value
        return data


def default_performance_history() -> PerformanceHistory:
    """Baseline snapshot for a learner who has not finished any quiz yet."""
    return PerformanceHistory()
