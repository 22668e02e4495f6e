"""
Configuration management for the adaptive learning engine.

This module centralizes all configuration settings:
- Engine constants (weights, thresholds, caps) in one immutable section
- Filesystem locations of the bundled JSON Schemas
- Log level loaded from the environment
- Single source of truth for all settings
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

# Load environment variables from .env file
load_dotenv()

# Silent until the hosting application calls configure_logging()
logger.disable("src")


@dataclass(frozen=True)
class AdaptiveConfig:
    """
    Numeric constants of the adaptive engine.

    Frozen and shared by every caller. Build a new instance with
    ``dataclasses.replace`` to experiment with other values.
    """

    # Modality ranking (performance 60%, stated preference 40 points flat)
    performance_weight: float = 0.6
    preference_bonus: float = 40.0

    # Difficulty adjustment
    min_lessons_for_adaptation: int = 3
    rolling_window: int = 5
    min_window_scores: int = 3  # recent scores before the window replaces the lifetime average
    step_up_threshold: int = 85
    step_down_threshold: int = 55

    # Performance updates
    ema_alpha: float = 0.3
    strong_topic_threshold: int = 80
    weak_topic_threshold: int = 50
    topic_memory: int = 5
    trend_delta: int = 3

    # Tier score
    quiz_weight: float = 0.45
    modality_weight: float = 0.25
    momentum_weight: float = 0.15
    momentum_per_lesson: int = 4
    streak_factor: float = 1.8
    streak_bonus_cap: float = 16.0
    difficulty_bonus: tuple[tuple[str, int], ...] = (
        ("beginner", 2),
        ("intermediate", 8),
        ("advanced", 14),
    )
    completion_high: float = 0.65
    completion_mid: float = 0.35
    completion_bonus_high: int = 8
    completion_bonus_mid: int = 2
    completion_penalty: int = -8
    tier_divisor: float = 1.18

    # Tier and streak classification
    legend_cutoff: int = 85
    pro_cutoff: int = 70
    intermediate_cutoff: int = 50
    strong_streak: int = 7
    warning_streak: int = 3

    # Recommendations
    max_recommended: int = 6
    max_challenge: int = 2
    max_explore: int = 3
    signal_depth: int = 2  # most recent weak/strong topics considered


@dataclass
class PathConfig:
    """File system paths - single source of truth for bundled resources."""

    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)

    schemas_dir: Path = field(init=False)
    learning_profile_schema: Path = field(init=False)
    performance_history_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.schemas_dir = self.project_root / "schemas"
        self.learning_profile_schema = self.schemas_dir / "learning_profile.schema.json"
        self.performance_history_schema = (
            self.schemas_dir / "performance_history.schema.json"
        )


@dataclass
class LoggingConfig:
    """Logging configuration (env-driven)."""

    log_level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper()
    )


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from src.config import config

        # Access settings
        threshold = config.adaptive.step_up_threshold
        schema = config.paths.performance_history_schema
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.adaptive = AdaptiveConfig()
            cls._instance.logging = LoggingConfig()

        return cls._instance

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []
        adaptive = self.adaptive

        if adaptive.step_down_threshold >= adaptive.step_up_threshold:
            errors.append(
                f"step_down_threshold ({adaptive.step_down_threshold}) must be < "
                f"step_up_threshold ({adaptive.step_up_threshold})"
            )

        if adaptive.weak_topic_threshold >= adaptive.strong_topic_threshold:
            errors.append(
                f"weak_topic_threshold ({adaptive.weak_topic_threshold}) must be < "
                f"strong_topic_threshold ({adaptive.strong_topic_threshold})"
            )

        if not (0 < adaptive.ema_alpha <= 1):
            errors.append(f"ema_alpha must be in (0, 1], got {adaptive.ema_alpha}")

        if adaptive.tier_divisor <= 0:
            errors.append(f"tier_divisor must be > 0, got {adaptive.tier_divisor}")

        if not (
            adaptive.legend_cutoff > adaptive.pro_cutoff > adaptive.intermediate_cutoff
        ):
            errors.append(
                "Tier cut-offs must be strictly descending "
                f"(legend={adaptive.legend_cutoff}, pro={adaptive.pro_cutoff}, "
                f"intermediate={adaptive.intermediate_cutoff})"
            )

        if not (1 <= adaptive.min_window_scores <= adaptive.rolling_window):
            errors.append(
                f"min_window_scores ({adaptive.min_window_scores}) must be between 1 and "
                f"rolling_window ({adaptive.rolling_window})"
            )

        # Path validation
        for schema_path in (
            self.paths.learning_profile_schema,
            self.paths.performance_history_schema,
        ):
            if not schema_path.exists():
                errors.append(f"Schema not found: {schema_path}")

        return errors


# Global config instance
config = Config()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Route loguru output to a single stderr sink.

    Call once from the hosting application's entrypoint. Records from the
    `src` package stay disabled until this runs.
    """
    logger.remove()
    logger.enable("src")
    logger.add(
        sys.stderr,
        level=level or config.logging.log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{line} - {message}",
    )
