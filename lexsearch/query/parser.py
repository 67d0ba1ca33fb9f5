"""Parser for the query operator grammar.

Supported operators, written as prefixes or standalone tokens:

- ``!term``          exclude documents containing the term
- ``^term``          only keep documents containing the term
- ``*term``          boost the term's weight by e per star (``**term``, ...)
- ``a ~ b``          the two terms should appear close together
- ``a ~~ b ~~ c``    all chained terms should appear close together
"""

import math
from dataclasses import dataclass, field

from ..backends.base import QueryError
from ..indexing.analyzers import trim_punctuation

BINARY_PROXIMITY = "~"
CHAINED_PROXIMITY = "~~"
EXCLUDE = "!"
INCLUDE = "^"
PRIORITY = "*"


@dataclass(frozen=True)
class ParsedQuery:
    """Structured form of a raw query string."""

    text: str
    exclusions: frozenset[str] = frozenset()
    inclusions: frozenset[str] = frozenset()
    proximity: frozenset[frozenset[str]] = frozenset()
    frequencies: dict[str, float] = field(default_factory=dict)
    priorities: dict[str, int] = field(default_factory=dict)

    @property
    def terms(self) -> list[str]:
        """Query terms in the order they were first written."""
        return list(self.frequencies)

    @property
    def is_empty(self) -> bool:
        return not self.frequencies

    def to_string(self) -> str:
        """Convert query back to string representation."""
        parts = []
        for term in self.terms:
            parts.append(PRIORITY * self.priorities.get(term, 0) + term)
        parts.extend(f"{INCLUDE}{term}" for term in sorted(self.inclusions))
        parts.extend(f"{EXCLUDE}{term}" for term in sorted(self.exclusions))
        for group in sorted(self.proximity, key=sorted):
            operator = BINARY_PROXIMITY if len(group) == 2 else CHAINED_PROXIMITY
            parts.append(f" {operator} ".join(sorted(group)))
        return " ".join(parts)


class QueryParser:
    """Parser for search query strings."""

    def __init__(self, min_term_length: int = 2):
        """Initialize parser.

        Args:
            min_term_length: Shorter terms are dropped from the frequency map
        """
        self.min_term_length = min_term_length

    def parse(self, query_string: str) -> ParsedQuery:
        """Parse a query string into a structured query.

        Args:
            query_string: Raw query string from user

        Returns:
            ParsedQuery with operators and priority-boosted term frequencies

        Raises:
            QueryError: If the query is not a string
        """
        if query_string is not None and not isinstance(query_string, str):
            raise QueryError(f"Query must be a string, got {type(query_string).__name__}")

        raw = query_string.lower().split() if query_string else []

        exclusions = {
            trim_punctuation(word) for word in raw if word.startswith(EXCLUDE)
        }
        inclusions = {
            trim_punctuation(word) for word in raw if word.startswith(INCLUDE)
        }
        exclusions.discard("")
        inclusions.discard("")

        proximity = self._parse_binary_proximity(raw) | self._parse_chained_proximity(raw)
        priorities = self._parse_priorities(raw)

        frequencies: dict[str, float] = {}
        for word in raw:
            term = trim_punctuation(word)
            if len(term) < self.min_term_length or term in exclusions:
                continue
            frequencies[term] = frequencies.get(term, 0) + 1

        for term, stars in priorities.items():
            if term in frequencies:
                frequencies[term] *= math.exp(stars)

        return ParsedQuery(
            text=query_string or "",
            exclusions=frozenset(exclusions),
            inclusions=frozenset(inclusions),
            proximity=frozenset(proximity),
            frequencies=frequencies,
            priorities={t: s for t, s in priorities.items() if t in frequencies},
        )

    def _parse_binary_proximity(self, raw: list[str]) -> set[frozenset[str]]:
        """Collect ``a ~ b`` pairs."""
        groups = set()
        for i in range(1, len(raw) - 1):
            if raw[i] != BINARY_PROXIMITY:
                continue
            group = frozenset(
                term
                for term in (trim_punctuation(raw[i - 1]), trim_punctuation(raw[i + 1]))
                if term
            )
            if len(group) == 2:
                groups.add(group)
        return groups

    def _parse_chained_proximity(self, raw: list[str]) -> set[frozenset[str]]:
        """Collect ``a ~~ b ~~ c`` chains, one group per chain."""
        groups = set()
        i = 1
        while i < len(raw) - 1:
            if raw[i] != CHAINED_PROXIMITY:
                i += 1
                continue

            members = {trim_punctuation(raw[i - 1])}
            j = i
            while j < len(raw) - 1 and raw[j] == CHAINED_PROXIMITY:
                members.add(trim_punctuation(raw[j + 1]))
                i = j
                j += 2

            members.discard("")
            if len(members) > 1:
                groups.add(frozenset(members))
            i += 2
        return groups

    def _parse_priorities(self, raw: list[str]) -> dict[str, int]:
        """Count leading stars per term, keeping the largest count seen."""
        priorities: dict[str, int] = {}
        for word in raw:
            stars = 0
            for char in word:
                if char == PRIORITY:
                    stars += 1
                elif char != INCLUDE:
                    break
            if not stars:
                continue
            term = trim_punctuation(word)
            if term:
                priorities[term] = max(priorities.get(term, 0), stars)
        return priorities
