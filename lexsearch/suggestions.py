"""'Did you mean' query rewriting."""

from .query.expander import Query
from .ranking import VectorSpaceRanker


class SuggestionGenerator:
    """Rewrites a query with the most relevant related term per query term."""

    def __init__(self, ranker: VectorSpaceRanker):
        self.ranker = ranker

    def best_candidate(self, query: Query, term: str) -> str:
        """Candidate maximizing affinity times word relevance.

        Ties keep the first candidate; a term without candidates is kept
        as typed.
        """
        best_term = term
        best_score = -1.0
        for candidate, affinity in query.suggestions.get(term, {}).items():
            score = affinity * self.ranker.word_relevance(candidate)
            if score > best_score:
                best_term, best_score = candidate, score
        return best_term

    def suggest(self, query: Query) -> str:
        """Rewritten query, terms in their original order."""
        return " ".join(self.best_candidate(query, term) for term in query.terms)
