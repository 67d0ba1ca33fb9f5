"""Lexical search over plain text documents.

Builds a positional inverted index, expands queries by stem, spelling and
synonymy, ranks documents by cosine similarity with proximity dampening and
extracts a snippet per result.
"""

from .backends import (
    CacheError,
    DocumentSource,
    FileSystemSource,
    MemorySource,
    QueryError,
    SearchError,
    SourceDocument,
    SourceError,
)
from .cache import IndexCache
from .config import SearchSettings, load_settings
from .engine import SearchEngine, create_engine, create_memory_engine
from .highlighting import SnippetGenerator
from .index import InvertedIndex
from .models import Document, IndexSnapshot, SearchItem, SearchResult
from .query import ParsedQuery, Query, QueryExpander, QueryParser
from .ranking import VectorSpaceRanker
from .suggestions import SuggestionGenerator

__version__ = "1.0.0"

__all__ = [
    # Engine
    "SearchEngine",
    "create_engine",
    "create_memory_engine",
    # Index
    "InvertedIndex",
    "IndexCache",
    # Query
    "QueryParser",
    "ParsedQuery",
    "QueryExpander",
    "Query",
    # Scoring and presentation
    "VectorSpaceRanker",
    "SnippetGenerator",
    "SuggestionGenerator",
    # Models
    "Document",
    "IndexSnapshot",
    "SearchItem",
    "SearchResult",
    # Sources
    "DocumentSource",
    "SourceDocument",
    "FileSystemSource",
    "MemorySource",
    # Configuration
    "SearchSettings",
    "load_settings",
    # Exceptions
    "SearchError",
    "SourceError",
    "CacheError",
    "QueryError",
]
