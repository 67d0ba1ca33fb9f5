"""Snippet extraction for search results."""

import logging
from collections import deque

from .index import InvertedIndex
from .query.expander import Query

logger = logging.getLogger(__name__)

DEFAULT_SNIPPET_SIZE = 75


class SnippetGenerator:
    """Picks the token window of a document that best covers a query.

    Every informative token related to a query term gets a relevance score
    for that term. The best window is the one, at most ``snippet_size``
    tokens wide, maximizing the sum over query terms of the best score
    inside it.
    """

    def __init__(self, index: InvertedIndex, snippet_size: int = DEFAULT_SNIPPET_SIZE):
        """Initialize snippet generator.

        Args:
            index: Index the documents belong to
            snippet_size: Number of tokens per snippet
        """
        if snippet_size < 1:
            raise ValueError(f"Snippet size must be positive, got {snippet_size}")
        self.index = index
        self.snippet_size = snippet_size

    def snippet(self, document: str, query: Query) -> str:
        """Excerpt of a document in its original case."""
        tokens = self.index.tokens(document)
        start, end = self.window(document, query, len(tokens))
        return " ".join(token.text for token in tokens[start:end])

    def window(self, document: str, query: Query, length: int | None = None) -> tuple[int, int]:
        """Token range [start, end) of the snippet.

        Args:
            document: Document name
            query: Expanded query
            length: Token count of the document, if already known

        Returns:
            Range exactly ``snippet_size`` tokens wide, or the whole document
            when it is shorter
        """
        if length is None:
            length = len(self.index.tokens(document))
        if length <= self.snippet_size:
            return 0, length

        relevant = self._relevant_positions(document, query)
        if not relevant:
            return 0, self.snippet_size

        first, last = self._best_window(relevant)
        return self._fit(first, last, length)

    def _relevant_positions(
        self, document: str, query: Query
    ) -> list[tuple[int, dict[str, float]]]:
        total = self.index.total_documents
        scores: dict[int, dict[str, float]] = {}

        for query_term, related in query.suggestions.items():
            for term, affinity in related.items():
                if len(term) <= 1 or self.index.is_stop_word(term):
                    continue
                relevance = affinity * (
                    1 - self.index.document_frequency(term) / total
                )
                if relevance <= 0:
                    continue
                for position in self.index.positions(term, document):
                    by_term = scores.setdefault(position, {})
                    if relevance > by_term.get(query_term, 0.0):
                        by_term[query_term] = relevance

        return sorted(scores.items())

    def _best_window(self, relevant: list[tuple[int, dict[str, float]]]) -> tuple[int, int]:
        """Inclusive positions of the highest scoring window.

        Each query term keeps a deque of (entry, score) with decreasing
        scores, so its maximum inside the window is at the front.
        """
        maxima: dict[str, deque[tuple[int, float]]] = {}
        best_score = -1.0
        best = (relevant[0][0], relevant[0][0])
        left = 0

        for right, (position, by_term) in enumerate(relevant):
            for term, score in by_term.items():
                queue = maxima.setdefault(term, deque())
                while queue and queue[-1][1] <= score:
                    queue.pop()
                queue.append((right, score))

            while position - relevant[left][0] >= self.snippet_size:
                for queue in maxima.values():
                    if queue and queue[0][0] == left:
                        queue.popleft()
                left += 1

            score = sum(queue[0][1] for queue in maxima.values() if queue)
            if score > best_score:
                best_score = score
                best = (relevant[left][0], position)

        return best

    def _fit(self, first: int, last: int, length: int) -> tuple[int, int]:
        """Pad [first, last] evenly on both sides to exactly snippet_size."""
        extra = self.snippet_size - (last - first + 1)
        start = first - extra // 2
        end = last + 1 + (extra - extra // 2)

        if start < 0:
            end -= start
            start = 0
        if end > length:
            start -= end - length
            end = length
        return max(start, 0), end
