"""Base document source interface."""

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceDocument:
    """A document as supplied by a source."""

    name: str
    text: str


class DocumentSource(ABC):
    """Abstract interface for document sources."""

    @abstractmethod
    def documents(self) -> Iterator[SourceDocument]:
        """Enumerate every document in the source.

        Yields:
            SourceDocument for each document, in a stable order

        Raises:
            SourceError: If a document cannot be read
        """
        pass

    @abstractmethod
    def stamps(self) -> dict[str, float]:
        """Get the modification stamp of every document.

        Returns:
            Dictionary mapping document names to modification stamps
        """
        pass

    def read(self, name: str) -> str:
        """Read the text of a single document.

        Args:
            name: Document name

        Returns:
            Full document text

        Raises:
            SourceError: If the document does not exist
        """
        for document in self.documents():
            if document.name == name:
                return document.text
        raise SourceError(f"Unknown document: {name}")

    def fingerprint(self) -> str:
        """Hash of the document names and modification stamps.

        Two sources with the same fingerprint hold the same document set.
        """
        digest = hashlib.sha256()
        for name, stamp in sorted(self.stamps().items()):
            digest.update(name.encode("utf-8"))
            digest.update(b"\0")
            digest.update(repr(stamp).encode("ascii"))
            digest.update(b"\n")
        return digest.hexdigest()


class SearchError(Exception):
    """Base exception for search-related errors."""


class SourceError(SearchError):
    """Error while reading documents from a source."""


class CacheError(SearchError):
    """Error while writing the index cache."""


class QueryError(SearchError):
    """Error during query parsing or execution."""
