"""Vector-space ranking with proximity dampening.

Documents and queries are TF-IDF vectors over the index vocabulary. The
cosine of the two vectors is the base score; each proximity group of the
query then divides it by a factor that grows with the logarithm of the
smallest window holding every term of the group.
"""

import heapq
import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .index import InvertedIndex
from .query.expander import Query

logger = logging.getLogger(__name__)

UNBOUNDED_SPAN = 2**31 - 1
PROXIMITY_BASE = 5


@dataclass(frozen=True)
class ScoredDocument:
    """A document that passed filtering with its final score."""

    name: str
    score: float
    similarity: float = 0.0
    dampening: float = 1.0


def minimal_span(positions_by_term: Mapping[str, Sequence[int]]) -> int:
    """Smallest window (right - left) holding every term at least once.

    Merges the posting lists into one ascending stream tagged by term and
    sweeps it with two pointers.

    >>> minimal_span({"a": [2, 9], "b": [5]})
    3

    Returns:
        The span, or UNBOUNDED_SPAN when some term never occurs
    """
    if not positions_by_term or not all(positions_by_term.values()):
        return UNBOUNDED_SPAN

    stream = list(
        heapq.merge(
            *(
                [(position, term) for position in positions]
                for term, positions in positions_by_term.items()
            )
        )
    )
    needed = len(positions_by_term)
    counts: dict[str, int] = {}
    best = UNBOUNDED_SPAN
    left = 0

    for position, term in stream:
        counts[term] = counts.get(term, 0) + 1
        while len(counts) == needed:
            left_position, left_term = stream[left]
            best = min(best, position - left_position)
            counts[left_term] -= 1
            if not counts[left_term]:
                del counts[left_term]
            left += 1

    return best


def proximity_factor(span: int) -> int:
    """floor(log5(span)) + 1, computed on integers."""
    factor = 1
    while span >= PROXIMITY_BASE:
        span //= PROXIMITY_BASE
        factor += 1
    return factor


class VectorSpaceRanker:
    """Cosine-similarity ranker over precomputed document weights."""

    def __init__(self, index: InvertedIndex):
        self.index = index
        self._weights: dict[str, dict[str, float]] = {
            name: {} for name in index.document_names
        }
        self._norms: dict[str, float] = {}
        self._compute_weights()

    def _compute_weights(self) -> None:
        for term, documents in self.index.postings.items():
            idf = self.inverse_document_frequency(term)
            if not idf:
                continue
            for name in documents:
                weight = self.term_frequency(term, name) * idf
                if weight:
                    self._weights[name][term] = weight

        for name, weights in self._weights.items():
            self._norms[name] = math.sqrt(sum(w * w for w in weights.values()))

        logger.debug(f"Computed weight vectors for {len(self._weights)} documents")

    def term_frequency(self, term: str, document: str) -> float:
        """Occurrences normalized by the document's most repeated term."""
        maximum = self.index.most_repeated_count(document)
        if not maximum:
            return 0.0
        return self.index.frequency(term, document) / maximum

    def inverse_document_frequency(self, term: str) -> float:
        frequency = self.index.document_frequency(term)
        if not frequency:
            return 0.0
        return math.log10(self.index.total_documents / frequency)

    def document_weight(self, term: str, document: str) -> float:
        return self._weights.get(document, {}).get(term, 0.0)

    def document_norm(self, document: str) -> float:
        return self._norms.get(document, 0.0)

    def query_weights(self, query: Query) -> dict[str, float]:
        """TF-IDF weights of the expanded query terms."""
        maximum = query.most_repeated_occurrence
        if not maximum:
            return {}
        weights = {}
        for term, weight in query.expanded.items():
            value = weight / maximum * self.inverse_document_frequency(term)
            if value:
                weights[term] = value
        return weights

    def similarity(
        self, query_weights: Mapping[str, float], document: str
    ) -> float | None:
        """Cosine similarity, None when either vector is zero."""
        query_norm = math.sqrt(sum(w * w for w in query_weights.values()))
        document_norm = self.document_norm(document)
        if not query_norm or not document_norm:
            return None
        dot = sum(
            weight * self.document_weight(term, document)
            for term, weight in query_weights.items()
        )
        return dot / (query_norm * document_norm)

    def dampening(self, query: Query, document: str) -> float:
        """Proximity dampening factor in (0, 1]."""
        divisor = 1
        for group in query.proximity:
            span = minimal_span(
                {term: self.index.positions(term, document) for term in group}
            )
            divisor *= proximity_factor(span)
        return 1 / divisor

    def passes_filters(self, query: Query, document: str) -> bool:
        """Check inclusion and exclusion operators."""
        if any(self.index.frequency(term, document) for term in query.exclusions):
            return False
        return all(self.index.frequency(term, document) for term in query.inclusions)

    def word_relevance(self, term: str) -> float:
        """Sum of a term's weights over the documents containing it."""
        return sum(
            self.document_weight(term, name)
            for name in self.index.documents_containing(term)
        )

    def rank(self, query: Query) -> list[ScoredDocument]:
        """Score and order the eligible documents for a query.

        Args:
            query: Expanded query

        Returns:
            Documents with a defined non-zero score, best first
        """
        query_weights = self.query_weights(query)
        if not query_weights:
            return []

        candidates = set()
        for term in query_weights:
            candidates.update(self.index.documents_containing(term))

        scored = []
        for name in self.index.document_names:
            if name not in candidates or not self.passes_filters(query, name):
                continue
            similarity = self.similarity(query_weights, name)
            if similarity is None or math.isnan(similarity) or not similarity:
                continue
            dampening = self.dampening(query, name)
            scored.append(
                ScoredDocument(
                    name=name,
                    score=similarity * dampening,
                    similarity=similarity,
                    dampening=dampening,
                )
            )

        scored.sort(key=lambda s: s.score, reverse=True)
        return scored
