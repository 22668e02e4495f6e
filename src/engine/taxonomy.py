"""
Topic taxonomy: category key -> ordered topics and an icon.

Declaration order matters. It breaks ties in category resolution and
decides which categories the explore pass visits first, so the taxonomy
is an ordered tuple of records, never a dict to iterate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class TopicCategory:
    """One taxonomy category."""

    key: str
    topics: tuple[str, ...]
    icon: str


class TopicTaxonomy:
    """
    Read-only, ordered collection of topic categories.

    Usage:
        taxonomy = TopicTaxonomy(categories)
        space = taxonomy.get("space")
        for category in taxonomy:
            ...
    """

    def __init__(self, categories: tuple[TopicCategory, ...]):
        keys = [c.key for c in categories]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise ValueError(f"Duplicate taxonomy keys: {', '.join(duplicates)}")
        self._categories = tuple(categories)
        self._by_key = {c.key: c for c in self._categories}

    def __iter__(self) -> Iterator[TopicCategory]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str) -> Optional[TopicCategory]:
        """Get a category by key (None if unknown)."""
        return self._by_key.get(key)

    def keys(self) -> tuple[str, ...]:
        """Category keys in declaration order."""
        return tuple(c.key for c in self._categories)


DEFAULT_TAXONOMY = TopicTaxonomy((
    TopicCategory("science", ("Volcanoes", "Human Body", "Chemistry Basics", "Electricity", "Ecosystems", "Weather & Climate"), "🔬"),
    TopicCategory("math", ("Fractions", "Geometry", "Algebra Basics", "Statistics", "Problem Solving"), "🧮"),
    TopicCategory("history", ("Ancient Egypt", "World War II", "The Renaissance", "Space Race", "Industrial Revolution"), "🏛️"),
    TopicCategory("art", ("Color Theory", "Digital Art Basics", "Famous Artists", "Photography", "Graphic Design"), "🎨"),
    TopicCategory("technology", ("How the Internet Works", "Coding Basics", "Artificial Intelligence", "Cybersecurity", "Robotics"), "💻"),
    TopicCategory("languages", ("Spanish Basics", "French Phrases", "Japanese Culture & Language", "Sign Language"), "🌏"),
    TopicCategory("music", ("Music Theory", "Famous Composers", "How Instruments Work", "Song Writing"), "🎵"),
    TopicCategory("sports", ("Olympic History", "Sports Science", "Nutrition for Athletes", "Soccer Tactics"), "⚽"),
    TopicCategory("nature", ("Rainforests", "Ocean Life", "Endangered Species", "Climate Change", "Plant Biology"), "🌿"),
    TopicCategory("space", ("The Solar System", "Black Holes", "Mars Exploration", "Stars & Galaxies", "Astronaut Training"), "🚀"),
    TopicCategory("cooking", ("Kitchen Science", "World Cuisines", "Baking Basics", "Nutrition & Diet"), "🍳"),
    TopicCategory("animals", ("Dinosaurs", "Marine Biology", "Animal Behavior", "Pets & Care", "Migration Patterns"), "🐾"),
    TopicCategory("gaming", ("Game Design Basics", "Pixel Art", "Level Design", "Game History"), "🎮"),
    TopicCategory("writing", ("Story Structure", "Poetry", "Journalism", "Creative Writing Prompts"), "✍️"),
    TopicCategory("business", ("Entrepreneurship", "Financial Literacy", "Marketing Basics", "Economics 101"), "💼"),
    TopicCategory("health", ("First Aid Basics", "Mental Health", "Anatomy", "Healthy Habits"), "🏥"),
))
