"""Fuzzy matching for typo-tolerant search.

Similarity is derived from a weighted edit distance tuned for Spanish
spelling mistakes: letters that sound alike are cheap to substitute, a
missing accent is almost free and a silent "h" is cheap to insert or drop.

Fixed thresholds:
- no fuzzy matching for terms shorter than 3 characters
- the longer word may be at most 4/3 (+0.5 characters) of the shorter
- leading letters (ignoring a silent "h") must be phonetically compatible
- the distance may not exceed a third of the longer word's length
"""

from __future__ import annotations

import math

from .analyzers import base_letter

MIN_FUZZY_LENGTH = 3

PHONETIC_PAIRS = frozenset(
    frozenset(pair)
    for pair in ("bv", "ck", "cs", "cz", "cq", "gj", "kq", "sz")
)

CONFUSABLE_PAIRS = frozenset(
    frozenset(pair)
    for pair in (
        "iy", "rl", "mn",
        "ae", "ai", "ao", "au", "ei", "eo", "eu", "io", "iu", "ou",
    )
)


def indel_cost(char: str) -> float:
    """Cost of inserting or deleting a character."""
    return 0.5 if char == "h" else 1.0


def substitution_cost(char1: str, char2: str) -> float:
    """Cost of replacing one character with another.

    Examples:
        >>> substitution_cost("a", "á")
        0.25
        >>> substitution_cost("b", "v")
        0.5
        >>> substitution_cost("m", "n")
        0.75
    """
    if char1 == char2:
        return 0.0
    char1, char2 = base_letter(char1), base_letter(char2)
    if char1 == char2:
        return 0.25
    pair = frozenset((char1, char2))
    if pair in PHONETIC_PAIRS:
        return 0.5
    if pair in CONFUSABLE_PAIRS:
        return 0.75
    return 1.0


def _leading_letter(word: str) -> str:
    if word[0] == "h" and len(word) > 1:
        return base_letter(word[1])
    return base_letter(word[0])


def compatible(word1: str, word2: str) -> bool:
    """Cheap rejection test run before the dynamic program."""
    longer, shorter = (word1, word2) if len(word1) >= len(word2) else (word2, word1)
    if len(longer) * 2 / 3 - 0.5 > len(shorter):
        return False
    return substitution_cost(_leading_letter(word1), _leading_letter(word2)) <= 0.5


def weighted_distance(word1: str, word2: str, max_distance: float) -> float:
    """Weighted edit distance bounded by max_distance.

    Cells whose cheapest cost exceeds max_distance stay unfilled; the DP
    stops as soon as a whole row is unfilled.

    Returns:
        The distance, or math.inf when it exceeds max_distance
    """
    inf = math.inf
    previous = [0.0] * (len(word1) + 1)
    for col in range(1, len(word1) + 1):
        cost = previous[col - 1] + indel_cost(word1[col - 1])
        previous[col] = cost if cost <= max_distance else inf

    for row in range(1, len(word2) + 1):
        char2 = word2[row - 1]
        current = [inf] * (len(word1) + 1)
        first = previous[0] + indel_cost(char2)
        current[0] = first if first <= max_distance else inf

        for col in range(1, len(word1) + 1):
            char1 = word1[col - 1]
            cost = min(
                previous[col - 1] + substitution_cost(char1, char2),
                current[col - 1] + indel_cost(char1),
                previous[col] + indel_cost(char2),
            )
            if cost <= max_distance:
                current[col] = cost

        if all(cell == inf for cell in current):
            return inf
        previous = current

    return previous[len(word1)]


def similarity(word1: str, word2: str) -> float:
    """Graphical similarity between two terms in [0, 1].

    The measure is symmetric: the longer word (the first one on ties) is
    used for the cutoff and the normalization.

    Examples:
        >>> similarity("casa", "casa")
        1.0
        >>> similarity("vaca", "baca")
        0.875
        >>> similarity("casa", "perro")
        0.0
    """
    if word1 == word2:
        return 1.0
    if len(word2) > len(word1):
        word1, word2 = word2, word1
    if len(word2) < MIN_FUZZY_LENGTH or not compatible(word1, word2):
        return 0.0

    distance = weighted_distance(word1, word2, len(word1) / 3)
    if distance == math.inf:
        return 0.0
    return 1 - distance / len(word1)
