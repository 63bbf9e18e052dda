"""Topic label tokenization."""

import re

# Words that never make two topics "the same subject"
STOP_WORDS: frozenset[str] = frozenset([
    # Articles and conjunctions
    "a", "an", "the", "and", "or",
    # Prepositions
    "in", "on", "at", "to", "for", "of", "with", "by", "about",
    # Question words and copulas
    "how", "what", "why", "is", "are",
])

MIN_TOKEN_LENGTH = 3

_SPLIT_RE = re.compile(r"[\s\-_]+")


def tokenize(text: str) -> list[str]:
    """
    Split a topic label into its significant words.

    Lowercases, splits on whitespace, hyphens and underscores, then drops
    stop words and tokens shorter than three characters. Order is kept.

    Args:
        text: Topic title or conversation title

    Returns:
        Significant tokens in their original order
    """
    return [
        token
        for token in _SPLIT_RE.split(text.lower())
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def significant_tokens(text: str) -> set[str]:
    """Distinct significant tokens of a label."""
    return set(tokenize(text))
