"""Data models for search functionality using msgspec for performance."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import msgspec


class IndexSnapshot(msgspec.Struct, kw_only=True):
    """Serializable state of an inverted index.

    Only plain nested string/number maps, so any JSON store can hold it.
    """

    fingerprint: str
    postings: dict[str, dict[str, list[int]]]
    token_counts: dict[str, int]
    max_frequencies: dict[str, int]
    stems: dict[str, str] = msgspec.field(default_factory=dict)
    version: int = 1


class SearchItem(msgspec.Struct, frozen=True):
    """A single ranked document."""

    title: str
    snippet: str
    score: float


@dataclass
class Document:
    """An indexed document and its cached statistics."""

    name: str
    text: str
    token_count: int = 0
    max_frequency: int = 0

    @property
    def display_name(self) -> str:
        return Path(self.name).name


@dataclass
class SearchResult:
    """Complete search results with the suggested query."""

    query: str
    items: list[SearchItem] = field(default_factory=list)
    suggestion: str = ""
    search_time_ms: float = 0.0

    @property
    def is_empty(self) -> bool:
        """Check if no results were found."""
        return not self.items

    @property
    def top_item(self) -> SearchItem | None:
        """Get the highest scoring result."""
        return self.items[0] if self.items else None

    def __len__(self) -> int:
        return len(self.items)
