"""File system document source."""

import logging
from collections.abc import Iterator
from pathlib import Path

from .base import DocumentSource, SourceDocument, SourceError

logger = logging.getLogger(__name__)


class FileSystemSource(DocumentSource):
    """Plain text documents stored as files in a single directory."""

    def __init__(self, content_dir: Path, pattern: str = "*.txt", encoding: str = "utf-8"):
        self.content_dir = Path(content_dir)
        self.pattern = pattern
        self.encoding = encoding

    def _paths(self) -> list[Path]:
        if not self.content_dir.is_dir():
            raise SourceError(f"Content directory not found: {self.content_dir}")
        return sorted(p for p in self.content_dir.glob(self.pattern) if p.is_file())

    def documents(self) -> Iterator[SourceDocument]:
        for path in self._paths():
            yield SourceDocument(name=str(path), text=self._read_path(path))

    def stamps(self) -> dict[str, float]:
        return {str(path): path.stat().st_mtime for path in self._paths()}

    def read(self, name: str) -> str:
        return self._read_path(Path(name))

    def _read_path(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding, errors="replace")
        except OSError as e:
            logger.error(f"Cannot read document {path}: {e}")
            raise SourceError(f"Cannot read document {path}: {e}") from e
