"""Tests for the index snapshot cache."""

import logging

import pytest

from lexsearch.backends import CacheError
from lexsearch.cache import IndexCache


@pytest.fixture
def cache(tmp_path):
    return IndexCache(tmp_path / "cache")


class TestIndexCache:
    """Test cache hits, misses and writes."""

    def test_empty_cache_misses(self, cache):
        assert cache.stored_fingerprint() is None
        assert cache.load("abc") is None

    def test_save_then_load(self, cache, index):
        cache.save(index.to_snapshot("abc"))

        snapshot = cache.load("abc")

        assert snapshot is not None
        assert snapshot.fingerprint == "abc"
        assert snapshot.postings == index.postings
        assert cache.is_fresh("abc")

    def test_fingerprint_mismatch_misses(self, cache, index):
        cache.save(index.to_snapshot("abc"))
        assert cache.load("other") is None

    def test_stale_snapshot_is_not_decoded(self, cache, index):
        cache.save(index.to_snapshot("abc"))
        cache.snapshot_file.write_text("not json", encoding="utf-8")

        # The fingerprint check alone decides the miss
        assert cache.load("other") is None

    def test_corrupt_snapshot_misses(self, cache, index, caplog):
        cache.save(index.to_snapshot("abc"))
        cache.snapshot_file.write_text("{broken", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="lexsearch"):
            assert cache.load("abc") is None
        assert "unreadable" in caplog.text

    def test_corrupt_stamp_misses(self, cache, index):
        cache.save(index.to_snapshot("abc"))
        cache.stamp_file.write_text("[]", encoding="utf-8")
        assert cache.stored_fingerprint() is None
        assert cache.load("abc") is None

    def test_clear(self, cache, index):
        cache.save(index.to_snapshot("abc"))
        cache.clear()
        assert not cache.snapshot_file.exists()
        assert cache.load("abc") is None

    def test_no_temp_files_left(self, cache, index):
        cache.save(index.to_snapshot("abc"))
        assert sorted(p.name for p in cache.cache_dir.iterdir()) == [
            "fingerprint.json",
            "index.json",
        ]

    def test_unwritable_directory(self, tmp_path, index):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        cache = IndexCache(blocker / "cache")

        with pytest.raises(CacheError):
            cache.save(index.to_snapshot("abc"))
