"""Decide whether two topic labels name the same subject.

Two heuristics, both token based:
- INTERSECTION: shared significant words, with substring containment fallback
- LCS: longest contiguous run of shared words

Neither is symmetric. Callers pass (existing cluster label, incoming label).
"""

from enum import Enum

from topicmap.clustering.tokenizer import tokenize


class MatcherVariant(str, Enum):
    """Label matching heuristic."""

    INTERSECTION = "intersection"
    LCS = "lcs"


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def match_intersection(label_a: str, label_b: str) -> str | None:
    """Match on shared significant words.

    Returns the shorter original label when one side's words are all shared,
    the shared words when at least two are shared, otherwise falls back to
    case-insensitive substring containment.
    """
    words_a = tokenize(label_a)
    words_b = tokenize(label_b)
    intersection = [w for w in words_a if w in words_b]

    if intersection:
        a_covered = all(w in words_b for w in words_a)
        b_covered = all(w in words_a for w in words_b)
        if a_covered or b_covered:
            return label_b if len(label_b) < len(label_a) else label_a
        if len(intersection) >= 2:
            return " ".join(intersection)

    if _contains(label_a, label_b):
        return label_b
    if _contains(label_b, label_a):
        return label_a
    return None


def longest_common_run(words_a: list[str], words_b: list[str]) -> list[str]:
    """Longest contiguous run of equal tokens (earliest in words_a on ties)."""
    best_len = 0
    best_end = 0
    previous = [0] * (len(words_b) + 1)

    for i in range(1, len(words_a) + 1):
        current = [0] * (len(words_b) + 1)
        for j in range(1, len(words_b) + 1):
            if words_a[i - 1] == words_b[j - 1]:
                current[j] = previous[j - 1] + 1
                if current[j] > best_len:
                    best_len = current[j]
                    best_end = i
        previous = current

    return words_a[best_end - best_len:best_end]


def match_lcs(label_a: str, label_b: str) -> str | None:
    """Match on the longest contiguous run of shared words.

    A run of two or more words matches on its own; a single shared word
    matches only when one label contains the other.
    """
    run = longest_common_run(tokenize(label_a), tokenize(label_b))
    is_substring = _contains(label_a, label_b) or _contains(label_b, label_a)

    if len(run) >= 2 or (run and is_substring):
        return " ".join(run)
    return None


def match(label_a: str, label_b: str, variant: MatcherVariant = MatcherVariant.INTERSECTION) -> str | None:
    """Return the merge label for two topic labels, or None if they differ.

    Args:
        label_a: Label of the existing cluster
        label_b: Label of the incoming item
        variant: Matching heuristic

    Returns:
        Suggested shared label, or None for no match
    """
    if variant == MatcherVariant.LCS:
        return match_lcs(label_a, label_b)
    return match_intersection(label_a, label_b)
