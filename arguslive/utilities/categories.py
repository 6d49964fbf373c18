"""Guide category classification.

ARGUS TV carries a single free-text category per program. Host flags
(series, news, kids, sports) are derived from whole-word matches in it.
"""

import re
from functools import lru_cache
from re import Pattern

SERIES_WORDS = ("series",)
NEWS_WORDS = ("news",)
KIDS_WORDS = ("animation",)
SPORTS_WORDS = ("sport", "motor sports", "football", "cricket")


@lru_cache(maxsize=64)
def _word_pattern(word: str) -> Pattern:
    return re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)


def contains_word(text: str | None, word: str) -> bool:
    """Case-insensitive whole-word match.

    >>> contains_word("Drama Series", "series")
    True
    >>> contains_word("Miniseries", "series")
    False
    """
    if not text:
        return False
    return _word_pattern(word).search(text) is not None


def contains_any(text: str | None, words: tuple[str, ...]) -> bool:
    """True if any of the words occurs as a whole word in text."""
    return any(contains_word(text, w) for w in words)


def is_series(category: str | None) -> bool:
    return contains_any(category, SERIES_WORDS)


def is_news(category: str | None) -> bool:
    return contains_any(category, NEWS_WORDS)


def is_kids(category: str | None) -> bool:
    return contains_any(category, KIDS_WORDS)


def is_sports(category: str | None) -> bool:
    return contains_any(category, SPORTS_WORDS)
