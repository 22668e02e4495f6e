"""
Topic Recommender - taxonomy-driven suggestions from profile and performance.

Passes run in a fixed priority so higher-value guidance comes first:
1. Reinforcement: categories of the 2 most recent weak topics
2. Mastery extension: categories of the 2 most recent strong topics
3. Interest-based: the learner's interest categories (up to 6 "recommended")
4. Challenge: "Advanced: ..." picks from strong-topic categories (up to 2)
5. Explore: first topic of categories outside the interests (up to 3)

A running set of normalized topic texts keeps any topic from appearing twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from loguru import logger

from ..config import config
from ..models.learning_profile import LearningProfile, PerformanceHistory
from .normalizer import contains_either_way, is_completed, normalize_topic_text
from .taxonomy import DEFAULT_TAXONOMY, TopicCategory, TopicTaxonomy

RecommendationCategory = Literal["recommended", "challenge", "explore", "continue"]

CHALLENGE_ICON = "🏆"
CHALLENGE_PREFIX = "Advanced: "


@dataclass(frozen=True)
class TopicRecommendation:
    """
    A suggested course topic.

    Attributes:
        topic: Topic display text
        reason: Why it is suggested (user-facing)
        icon: Icon token of the category
        category: Which shelf it belongs on
    """
    topic: str
    reason: str
    icon: str
    category: RecommendationCategory

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "topic": self.topic,
            "reason": self.reason,
            "icon": self.icon,
            "category": self.category,
        }


def resolve_category(
    signal: str,
    taxonomy: TopicTaxonomy = DEFAULT_TAXONOMY,
) -> Optional[str]:
    """
    Map a free-text topic signal to a taxonomy category key.

    Tries, in order: exact key match, key substring match (either way),
    topic substring match (either way). The first category in declaration
    order wins; there is no scoring of a "best" match.

    Example:
        >>> resolve_category("volcanoes")
        'science'
    """
    normalized = normalize_topic_text(signal)
    if not normalized:
        return None

    if normalized in taxonomy:
        return normalized

    for key in taxonomy.keys():
        if contains_either_way(normalized, key):
            return key

    for category in taxonomy:
        for topic in category.topics:
            if contains_either_way(normalize_topic_text(topic), normalized):
                return category.key

    logger.debug(f"No taxonomy category for signal '{signal}'")
    return None


class _Selection:
    """Recommendations collected so far plus the normalized texts they use."""

    def __init__(self, completed_topics: Iterable[str]):
        self.completed = list(completed_topics or [])
        self.items: list[TopicRecommendation] = []
        self._seen: set[str] = set()

    def count(self, category: RecommendationCategory) -> int:
        return sum(1 for r in self.items if r.category == category)

    def is_taken(self, topic: str) -> bool:
        return normalize_topic_text(topic) in self._seen

    def is_available(self, topic: str) -> bool:
        return not is_completed(topic, self.completed) and not self.is_taken(topic)

    def first_available(self, category: TopicCategory) -> Optional[str]:
        return next((t for t in category.topics if self.is_available(t)), None)

    def add(self, recommendation: TopicRecommendation, topic: str):
        self.items.append(recommendation)
        self._seen.add(normalize_topic_text(topic))


def _recent_first(topics: tuple[str, ...], depth: int) -> list[str]:
    """The last `depth` entries, most recent first."""
    if depth <= 0:
        return []
    return list(reversed(topics[-depth:]))


def _signal_pass(
    selection: _Selection,
    signals: list[str],
    taxonomy: TopicTaxonomy,
    reason_template: str,
):
    """Pick one fresh topic from the category of each signal."""
    for signal in signals:
        key = resolve_category(signal, taxonomy)
        category = taxonomy.get(key) if key else None
        if category is None:
            continue
        topic = selection.first_available(category)
        if topic is None:
            continue
        selection.add(
            TopicRecommendation(
                topic=topic,
                reason=reason_template.format(signal=signal),
                icon=category.icon,
                category="recommended",
            ),
            topic,
        )


def recommend_topics(
    profile: LearningProfile,
    performance: PerformanceHistory,
    completed_topics: Optional[Iterable[str]] = None,
    taxonomy: TopicTaxonomy = DEFAULT_TAXONOMY,
) -> list[TopicRecommendation]:
    """
    Build prioritized, deduplicated topic recommendations.

    Args:
        profile: Learner profile (interests drive pass 3 and 5)
        performance: Performance snapshot (weak/strong topics drive passes 1, 2, 4)
        completed_topics: Titles of courses the learner already has
        taxonomy: Topic taxonomy (defaults to the built-in one)

    Returns:
        At most 6 "recommended", 2 "challenge" and 3 "explore" items, in pass order
    """
    settings = config.adaptive
    selection = _Selection(completed_topics or [])

    # 1. Reinforcement
    _signal_pass(
        selection,
        _recent_first(performance.weak_topics, settings.signal_depth),
        taxonomy,
        "Focus boost: strengthen {signal} with guided practice.",
    )

    # 2. Mastery extension
    _signal_pass(
        selection,
        _recent_first(performance.strong_topics, settings.signal_depth),
        taxonomy,
        "You performed well in {signal}. Try this next.",
    )

    # 3. Interest-based
    for interest in profile.interests:
        if selection.count("recommended") >= settings.max_recommended:
            break
        category = taxonomy.get(interest)
        if category is None:
            continue
        for topic in category.topics:
            if selection.count("recommended") >= settings.max_recommended:
                break
            if not selection.is_available(topic):
                continue
            selection.add(
                TopicRecommendation(
                    topic=topic,
                    reason=f"Based on your interest in {interest}",
                    icon=category.icon,
                    category="recommended",
                ),
                topic,
            )

    # 4. Challenge
    for strong_topic in performance.strong_topics:
        if selection.count("challenge") >= settings.max_challenge:
            break
        key = resolve_category(strong_topic, taxonomy)
        category = taxonomy.get(key) if key else None
        if category is None:
            continue
        topic = selection.first_available(category)
        if topic is None:
            continue
        selection.add(
            TopicRecommendation(
                topic=f"{CHALLENGE_PREFIX}{topic}",
                reason=f"You're excelling in {strong_topic} - ready for more?",
                icon=CHALLENGE_ICON,
                category="challenge",
            ),
            topic,
        )

    # 5. Explore
    interests = set(profile.interests)
    unexplored = [c for c in taxonomy if c.key not in interests][: settings.max_explore]
    for category in unexplored:
        if not category.topics:
            continue
        topic = category.topics[0]
        if selection.is_taken(topic):
            continue
        selection.add(
            TopicRecommendation(
                topic=topic,
                reason=f"Discover something new in {category.key}",
                icon=category.icon,
                category="explore",
            ),
            topic,
        )

    logger.debug(
        "Recommendations: "
        f"{selection.count('recommended')} recommended, "
        f"{selection.count('challenge')} challenge, "
        f"{selection.count('explore')} explore"
    )
    return selection.items
