"""Positional inverted index over a fixed document collection.

The index is built once (or restored from a snapshot) and is read-only
afterwards. The only mutable piece it owns is the stem cache, which queries
share and which only ever grows.
"""

import logging
import time
from collections import defaultdict
from collections.abc import Iterable, Iterator
from typing import Any

from .backends.base import DocumentSource
from .indexing.analyzers import Token, analyze
from .indexing.stemmer import StemCache
from .models import Document, IndexSnapshot

logger = logging.getLogger(__name__)

STOP_WORD_RATIO = 0.9


class InvertedIndex:
    """Term -> document -> positions index with document statistics."""

    def __init__(
        self,
        documents: dict[str, Document],
        postings: dict[str, dict[str, list[int]]],
        stem_cache: StemCache | None = None,
        changed: bool = True,
    ):
        """Initialize from already computed structures.

        Use :meth:`build` or :meth:`restore` instead of calling this directly.

        Args:
            documents: Document table keyed by name
            postings: Term -> document -> ascending positions
            stem_cache: Shared stem memo (default: empty cache)
            changed: True when built fresh, False when restored from a cache
        """
        self.documents = documents
        self.postings = postings
        self.stem_cache = stem_cache if stem_cache is not None else StemCache()
        self.changed = changed
        self.stop_words = self._compute_stop_words()

    @classmethod
    def build(
        cls, source: DocumentSource, stem_cache: StemCache | None = None
    ) -> "InvertedIndex":
        """Tokenize every document of a source and index it.

        Args:
            source: Document source to read
            stem_cache: Optional pre-seeded stem memo

        Returns:
            Freshly built index
        """
        start_time = time.time()
        documents: dict[str, Document] = {}
        postings: dict[str, dict[str, list[int]]] = defaultdict(dict)

        for source_doc in source.documents():
            tokens = analyze(source_doc.text)
            for position, token in enumerate(tokens):
                postings[token.term].setdefault(source_doc.name, []).append(position)
            documents[source_doc.name] = Document(
                name=source_doc.name,
                text=source_doc.text,
                token_count=len(tokens),
            )

        index = cls(documents, dict(postings), stem_cache=stem_cache, changed=True)
        index._compute_max_frequencies()

        logger.info(
            f"Indexed {len(documents)} documents, {len(index.postings)} terms "
            f"in {(time.time() - start_time) * 1000:.0f} ms"
        )
        return index

    @classmethod
    def restore(cls, snapshot: IndexSnapshot, source: DocumentSource) -> "InvertedIndex":
        """Rebuild an index from a cached snapshot.

        Document text is re-read from the source; statistics come from the
        snapshot.
        """
        documents = {}
        for source_doc in source.documents():
            documents[source_doc.name] = Document(
                name=source_doc.name,
                text=source_doc.text,
                token_count=snapshot.token_counts.get(source_doc.name, 0),
                max_frequency=snapshot.max_frequencies.get(source_doc.name, 0),
            )

        index = cls(
            documents,
            snapshot.postings,
            stem_cache=StemCache(snapshot.stems),
            changed=False,
        )
        logger.info(
            f"Restored index with {len(documents)} documents, "
            f"{len(index.postings)} terms"
        )
        return index

    def _compute_stop_words(self) -> frozenset[str]:
        total = len(self.documents)
        if not total:
            return frozenset()
        return frozenset(
            term
            for term, docs in self.postings.items()
            if len(term) > 1 and len(docs) / total > STOP_WORD_RATIO
        )

    def _compute_max_frequencies(self) -> None:
        maxima: dict[str, int] = dict.fromkeys(self.documents, 0)
        for term, docs in self.postings.items():
            if len(term) <= 1 or term in self.stop_words:
                continue
            for name, positions in docs.items():
                if len(positions) > maxima[name]:
                    maxima[name] = len(positions)
        for name, maximum in maxima.items():
            self.documents[name].max_frequency = maximum

    def frequency(self, term: str, document: str) -> int:
        """Number of occurrences of a term in a document."""
        return len(self.postings.get(term, {}).get(document, ()))

    def document_frequency(self, term: str) -> int:
        """Number of documents containing a term."""
        return len(self.postings.get(term, ()))

    def positions(self, term: str, document: str) -> list[int]:
        """Ascending positions of a term in a document (empty if absent)."""
        return self.postings.get(term, {}).get(document, [])

    def documents_containing(self, term: str) -> Iterable[str]:
        return self.postings.get(term, {}).keys()

    def most_repeated_count(self, document: str) -> int:
        """Occurrences of the most frequent informative term in a document."""
        return self.documents[document].max_frequency

    def is_stop_word(self, term: str) -> bool:
        return term in self.stop_words

    def tokens(self, document: str) -> list[Token]:
        """Token stream of a document, aligned with posting positions."""
        return analyze(self.documents[document].text)

    @property
    def vocabulary(self) -> Iterator[str]:
        return iter(self.postings)

    @property
    def document_names(self) -> list[str]:
        return list(self.documents)

    @property
    def total_documents(self) -> int:
        return len(self.documents)

    def __contains__(self, term: object) -> bool:
        return term in self.postings

    def __len__(self) -> int:
        return len(self.postings)

    def to_snapshot(self, fingerprint: str) -> IndexSnapshot:
        """Export the index as plain maps for a persistence layer."""
        return IndexSnapshot(
            fingerprint=fingerprint,
            postings=self.postings,
            token_counts={name: doc.token_count for name, doc in self.documents.items()},
            max_frequencies={
                name: doc.max_frequency for name, doc in self.documents.items()
            },
            stems=self.stem_cache.to_dict(),
        )

    def statistics(self) -> dict[str, Any]:
        """Get index statistics."""
        return {
            "total_documents": self.total_documents,
            "total_terms": len(self.postings),
            "total_tokens": sum(doc.token_count for doc in self.documents.values()),
            "stop_words": len(self.stop_words),
            "cached_stems": len(self.stem_cache),
            "changed": self.changed,
        }
