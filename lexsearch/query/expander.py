"""Query expansion over the index vocabulary.

Each query term is related to every vocabulary term through an affinity in
[0, 1]: identity, shared stem, graphical similarity or synonymy. Related
vocabulary terms receive a share of the query term's weight, which lets a
query for "gatos" score documents that only mention "gato" or "gata".
"""

import logging
import math
from dataclasses import dataclass, field

from ..index import InvertedIndex
from ..indexing.fuzzy import similarity
from ..indexing.stemmer import Stemmer
from ..indexing.synonyms import SynonymTable
from .parser import ParsedQuery

logger = logging.getLogger(__name__)

IDENTITY_AFFINITY = 1.0
STEM_AFFINITY = math.e / 3
SYNONYM_AFFINITY = math.pi / 10


def word_proximity(
    word1: str, word2: str, stemmer: Stemmer, synonyms: SynonymTable
) -> float:
    """Affinity between two terms.

    Checked in order: identity, same stem, fuzzy similarity, synonymy.

    Returns:
        Affinity in [0, 1], 0 when the terms are unrelated
    """
    if word1 == word2:
        return IDENTITY_AFFINITY
    if stemmer.stem(word1) == stemmer.stem(word2):
        return STEM_AFFINITY
    graphical = similarity(word1, word2)
    if graphical:
        return graphical
    if synonyms.are_synonyms(word1, word2):
        return SYNONYM_AFFINITY
    return 0.0


@dataclass
class Query:
    """A parsed query expanded against one index.

    Attributes:
        parsed: The operator structure and raw term frequencies
        suggestions: Query term -> vocabulary term -> affinity
        expanded: Vocabulary term -> accumulated weight
    """

    parsed: ParsedQuery
    suggestions: dict[str, dict[str, float]] = field(default_factory=dict)
    expanded: dict[str, float] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.parsed.text

    @property
    def terms(self) -> list[str]:
        return self.parsed.terms

    @property
    def exclusions(self) -> frozenset[str]:
        return self.parsed.exclusions

    @property
    def inclusions(self) -> frozenset[str]:
        return self.parsed.inclusions

    @property
    def proximity(self) -> frozenset[frozenset[str]]:
        return self.parsed.proximity

    @property
    def most_repeated_occurrence(self) -> float:
        """Largest expanded weight, 0 for an empty query."""
        return max(self.expanded.values(), default=0.0)

    @property
    def is_empty(self) -> bool:
        return not self.expanded

    def weight(self, term: str) -> float:
        return self.expanded.get(term, 0.0)

    def affinity(self, query_term: str, term: str) -> float:
        return self.suggestions.get(query_term, {}).get(term, 0.0)


class QueryExpander:
    """Expands parsed queries against an index vocabulary."""

    def __init__(
        self,
        index: InvertedIndex,
        stemmer: Stemmer | None = None,
        synonyms: SynonymTable | None = None,
    ):
        """Initialize expander.

        Args:
            index: Index whose vocabulary is scanned
            stemmer: Stemmer to use (default: one sharing the index stem cache)
            synonyms: Synonym table (default: built-in table)
        """
        self.index = index
        self.stemmer = stemmer or Stemmer(index.stem_cache)
        self.synonyms = synonyms if synonyms is not None else SynonymTable()

    def expand(self, parsed: ParsedQuery) -> Query:
        """Relate every query term to the vocabulary.

        Args:
            parsed: Parsed query

        Returns:
            Query carrying suggestion maps and expanded weights
        """
        query = Query(parsed=parsed)

        for term, frequency in parsed.frequencies.items():
            if self.index.is_stop_word(term):
                related = {term: IDENTITY_AFFINITY}
            else:
                related = self._related_terms(term)

            query.suggestions[term] = related
            for candidate, affinity in related.items():
                query.expanded[candidate] = (
                    query.expanded.get(candidate, 0.0) + frequency * affinity
                )

        logger.debug(
            f"Expanded {len(parsed.frequencies)} query terms "
            f"to {len(query.expanded)} vocabulary terms"
        )
        return query

    def _related_terms(self, term: str) -> dict[str, float]:
        related = {}
        for candidate in self.index.vocabulary:
            affinity = word_proximity(term, candidate, self.stemmer, self.synonyms)
            if affinity:
                related[candidate] = affinity
        return related
