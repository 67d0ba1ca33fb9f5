"""In-memory document source for testing and lightweight scenarios."""

import hashlib
from collections.abc import Iterator, Mapping

from .base import DocumentSource, SourceDocument, SourceError


class MemorySource(DocumentSource):
    """Document source backed by a name -> text mapping."""

    def __init__(self, documents: Mapping[str, str] | None = None):
        self._documents: dict[str, str] = dict(documents or {})

    def add(self, name: str, text: str) -> None:
        """Add or replace a document."""
        self._documents[name] = text

    def documents(self) -> Iterator[SourceDocument]:
        for name, text in self._documents.items():
            yield SourceDocument(name=name, text=text)

    def stamps(self) -> dict[str, float]:
        # Content hash stands in for a modification time
        return {name: self._stamp(text) for name, text in self._documents.items()}

    def read(self, name: str) -> str:
        try:
            return self._documents[name]
        except KeyError:
            raise SourceError(f"Unknown document: {name}") from None

    def __len__(self) -> int:
        return len(self._documents)

    @staticmethod
    def _stamp(text: str) -> float:
        digest = hashlib.blake2b(text.encode("utf-8"), digest_size=6).digest()
        return float(int.from_bytes(digest, "big"))
