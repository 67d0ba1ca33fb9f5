"""Document source implementations."""

from .base import (
    CacheError,
    DocumentSource,
    QueryError,
    SearchError,
    SourceDocument,
    SourceError,
)
from .filesystem import FileSystemSource
from .memory import MemorySource

__all__ = [
    "CacheError",
    "DocumentSource",
    "FileSystemSource",
    "MemorySource",
    "QueryError",
    "SearchError",
    "SourceDocument",
    "SourceError",
]
