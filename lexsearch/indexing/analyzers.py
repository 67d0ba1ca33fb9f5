"""Text analysis for indexing and querying.

Tokenization is deliberately simple: lowercase, split on whitespace and trim
non-alphanumeric characters from both ends of every token. Interior
punctuation ("e-mail", "3.14") is preserved so the same routine serves both
the index and the query operators.
"""

import unicodedata
from typing import NamedTuple


class Token(NamedTuple):
    """A normalized term and the surface text it came from."""

    term: str
    text: str


def trim_punctuation(word: str) -> str:
    """Remove leading and trailing non-alphanumeric characters.

    Args:
        word: Raw token

    Returns:
        Trimmed token, empty if the token held no letters or digits
    """
    first = 0
    last = len(word)
    while first < last and not word[first].isalnum():
        first += 1
    while last > first and not word[last - 1].isalnum():
        last -= 1
    return word[first:last]


def analyze(text: str) -> list[Token]:
    """Split text into normalized tokens, keeping the original surface text.

    Tokens that are empty after trimming are discarded, so token positions
    count only real terms.
    """
    tokens = []
    for raw in text.split():
        term = trim_punctuation(raw.lower())
        if term:
            tokens.append(Token(term, raw))
    return tokens


def tokenize(text: str) -> list[str]:
    """Split text into normalized terms."""
    return [token.term for token in analyze(text)]


def remove_accents(text: str) -> str:
    """Remove diacritical marks from text."""
    nfd = unicodedata.normalize("NFD", text)
    return "".join(char for char in nfd if unicodedata.category(char) != "Mn")


def base_letter(char: str) -> str:
    """First code point of the canonical decomposition of a character."""
    return unicodedata.normalize("NFD", char)[0]
