"""JSON cache for index snapshots.

The cache keeps two files: a small fingerprint file and the snapshot itself.
The fingerprint is compared before the snapshot is decoded, so a changed
document set never costs a full decode. Any problem while loading is a
cache miss, never an error.
"""

import logging
import tempfile
from pathlib import Path

import msgspec

from .backends.base import CacheError
from .models import IndexSnapshot

logger = logging.getLogger(__name__)


class CacheStamp(msgspec.Struct):
    fingerprint: str


class IndexCache:
    """Persists index snapshots in a cache directory."""

    SNAPSHOT_FILE = "index.json"
    STAMP_FILE = "fingerprint.json"

    def __init__(self, cache_dir: Path):
        self.cache_dir = Path(cache_dir)
        self.snapshot_file = self.cache_dir / self.SNAPSHOT_FILE
        self.stamp_file = self.cache_dir / self.STAMP_FILE

    def stored_fingerprint(self) -> str | None:
        """Fingerprint of the cached document set, None if unavailable."""
        try:
            stamp = msgspec.json.decode(self.stamp_file.read_bytes(), type=CacheStamp)
        except FileNotFoundError:
            return None
        except (OSError, msgspec.DecodeError, msgspec.ValidationError) as e:
            logger.warning(f"Unreadable cache stamp {self.stamp_file}: {e}")
            return None
        return stamp.fingerprint

    def is_fresh(self, fingerprint: str) -> bool:
        return self.stored_fingerprint() == fingerprint

    def load(self, fingerprint: str) -> IndexSnapshot | None:
        """Load the snapshot if it was taken from the same document set.

        Args:
            fingerprint: Fingerprint of the live document set

        Returns:
            Snapshot on a cache hit, None otherwise
        """
        if not self.is_fresh(fingerprint):
            logger.info("Index cache is stale or missing, rebuilding")
            return None

        try:
            snapshot = msgspec.json.decode(
                self.snapshot_file.read_bytes(), type=IndexSnapshot
            )
        except (OSError, msgspec.DecodeError, msgspec.ValidationError) as e:
            logger.warning(f"Discarding unreadable index cache: {e}")
            return None

        if snapshot.fingerprint != fingerprint:
            logger.warning("Index cache fingerprint mismatch, rebuilding")
            return None

        logger.debug(f"Index cache hit in {self.cache_dir}")
        return snapshot

    def save(self, snapshot: IndexSnapshot) -> None:
        """Write the snapshot, then its fingerprint, atomically.

        Raises:
            CacheError: If the cache directory cannot be written
        """
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self._write_atomic(self.snapshot_file, msgspec.json.encode(snapshot))
            self._write_atomic(
                self.stamp_file, msgspec.json.encode(CacheStamp(snapshot.fingerprint))
            )
        except OSError as e:
            logger.error(f"Cannot write index cache to {self.cache_dir}: {e}")
            raise CacheError(f"Cannot write index cache: {e}") from e
        logger.debug(f"Saved index cache to {self.cache_dir}")

    def clear(self) -> None:
        """Remove cached files."""
        for path in (self.stamp_file, self.snapshot_file):
            path.unlink(missing_ok=True)

    def _write_atomic(self, path: Path, data: bytes) -> None:
        temp_fd, temp_path = tempfile.mkstemp(dir=self.cache_dir, suffix=".tmp")
        try:
            with open(temp_fd, "wb") as f:
                f.write(data)
            Path(temp_path).replace(path)
        except Exception:
            Path(temp_path).unlink(missing_ok=True)
            raise
