"""
Text normalization for matching free-text topic signals.
"""

from __future__ import annotations

import re
from typing import Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_topic_text(value: str) -> str:
    """
    Lowercase, replace punctuation with spaces, collapse whitespace.

    Example:
        >>> normalize_topic_text("  Weather & Climate!! ")
        'weather climate'
    """
    if not value:
        return ""
    text = _NON_ALNUM.sub(" ", str(value).lower())
    return _WHITESPACE.sub(" ", text).strip()


def contains_either_way(a: str, b: str) -> bool:
    """True if either normalized string contains the other."""
    return a in b or b in a


def is_completed(topic: str, completed_topics: Iterable[str]) -> bool:
    """
    True if any completed course title contains topic (case-insensitive).

    Deliberately loose: "Volcanoes for Kids" counts as having completed
    "Volcanoes".
    """
    needle = topic.lower()
    return any(needle in str(title).lower() for title in completed_topics)
