"""Search engine over a plain text document collection."""

import logging
import time
from collections.abc import Mapping
from typing import Any

from .backends.base import CacheError, DocumentSource, QueryError
from .backends.filesystem import FileSystemSource
from .backends.memory import MemorySource
from .cache import IndexCache
from .config import SearchSettings
from .highlighting import SnippetGenerator
from .index import InvertedIndex
from .indexing.stemmer import Stemmer
from .indexing.synonyms import SynonymTable
from .models import SearchItem, SearchResult
from .query import QueryExpander, QueryParser
from .ranking import VectorSpaceRanker
from .suggestions import SuggestionGenerator

logger = logging.getLogger(__name__)


class SearchEngine:
    """Search engine for a fixed document collection.

    Coordinates query parsing and expansion, ranking, snippet extraction
    and query suggestions over one index.
    """

    def __init__(
        self,
        index: InvertedIndex,
        synonyms: SynonymTable | None = None,
        settings: SearchSettings | None = None,
        cache: IndexCache | None = None,
        fingerprint: str | None = None,
    ):
        """Initialize search engine.

        Args:
            index: Built or restored index
            synonyms: Synonym table (default: built-in table)
            settings: Engine settings (default: SearchSettings())
            cache: Cache store used by persist()
            fingerprint: Fingerprint of the indexed document set
        """
        self.index = index
        self.settings = settings or SearchSettings()
        self.synonyms = synonyms if synonyms is not None else SynonymTable()
        self.cache = cache
        self.fingerprint = fingerprint

        self.query_parser = QueryParser()
        self.query_expander = QueryExpander(
            index, stemmer=Stemmer(index.stem_cache), synonyms=self.synonyms
        )
        self.ranker = VectorSpaceRanker(index)
        self.snippets = SnippetGenerator(index, self.settings.snippet_size)
        self.suggestions = SuggestionGenerator(self.ranker)
        self._last_query_time = 0.0

    def search(self, query: str, limit: int | None = None) -> SearchResult:
        """Execute a search query.

        Args:
            query: Search query string
            limit: Maximum number of results (default: settings.result_limit)

        Returns:
            Ranked items with snippets and the suggested query

        Raises:
            QueryError: If the query is not a string
        """
        start_time = time.time()

        if query is not None and not isinstance(query, str):
            raise QueryError(f"Query must be a string, got {type(query).__name__}")

        if not query or not query.strip():
            return SearchResult(query=query or "")

        limit = self.settings.result_limit if limit is None else max(0, limit)

        parsed = self.query_parser.parse(query.strip())
        expanded = self.query_expander.expand(parsed)
        ranked = self.ranker.rank(expanded)

        items = []
        for scored in ranked[:limit]:
            document = self.index.documents[scored.name]
            items.append(
                SearchItem(
                    title=document.display_name,
                    snippet=self.snippets.snippet(scored.name, expanded),
                    score=scored.score,
                )
            )

        suggestion = self.suggestions.suggest(expanded)
        elapsed = (time.time() - start_time) * 1000
        self._last_query_time = elapsed

        logger.info(
            f"Query {query!r}: {len(ranked)} matches, showing {len(items)} "
            f"in {elapsed:.1f} ms"
        )
        return SearchResult(
            query=query,
            items=items,
            suggestion=suggestion,
            search_time_ms=elapsed,
        )

    def persist(self) -> bool:
        """Save the index and stem cache if a cache store is configured.

        Returns:
            True if a snapshot was written
        """
        if self.cache is None or self.fingerprint is None:
            return False
        self.cache.save(self.index.to_snapshot(self.fingerprint))
        return True

    def get_statistics(self) -> dict[str, Any]:
        """Get engine statistics."""
        stats = self.index.statistics()
        stats["synonyms"] = len(self.synonyms)
        stats["last_query_time_ms"] = self._last_query_time
        return stats


def load_index(
    source: DocumentSource, cache: IndexCache | None = None, rebuild: bool = False
) -> tuple[InvertedIndex, str]:
    """Restore the index from the cache or build it from the source.

    The fingerprint of the live document set decides between the two before
    any cached data is decoded.

    Returns:
        The index and the fingerprint of the document set
    """
    fingerprint = source.fingerprint()

    snapshot = None
    if cache is not None and not rebuild:
        snapshot = cache.load(fingerprint)

    if snapshot is not None:
        return InvertedIndex.restore(snapshot, source), fingerprint

    index = InvertedIndex.build(source)
    if cache is not None:
        try:
            cache.save(index.to_snapshot(fingerprint))
        except CacheError as e:
            logger.warning(f"Index not cached: {e}")
    return index, fingerprint


def create_engine(settings: SearchSettings, rebuild: bool = False) -> SearchEngine:
    """Create a SearchEngine over a content directory.

    Args:
        settings: Resolved settings
        rebuild: Ignore any cached index

    Raises:
        SourceError: If the content directory cannot be read
    """
    source = FileSystemSource(settings.content_dir)
    cache = IndexCache(settings.cache_dir) if settings.cache_dir else None
    index, fingerprint = load_index(source, cache, rebuild=rebuild)

    synonyms = (
        SynonymTable.from_file(settings.synonyms_path)
        if settings.synonyms_path
        else SynonymTable()
    )
    return SearchEngine(
        index,
        synonyms=synonyms,
        settings=settings,
        cache=cache,
        fingerprint=fingerprint,
    )


def create_memory_engine(
    documents: Mapping[str, str],
    synonyms: SynonymTable | None = None,
    settings: SearchSettings | None = None,
) -> SearchEngine:
    """Create a SearchEngine over in-memory documents."""
    source = MemorySource(documents)
    index, fingerprint = load_index(source)
    return SearchEngine(index, synonyms=synonyms, settings=settings, fingerprint=fingerprint)
