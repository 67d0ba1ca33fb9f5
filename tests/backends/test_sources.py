"""Tests for document sources."""

import os

import pytest

from lexsearch.backends import (
    DocumentSource,
    FileSystemSource,
    MemorySource,
    SearchError,
    SourceDocument,
    SourceError,
)


class TestDocumentSourceInterface:
    """Test the abstract source."""

    def test_is_abstract(self):
        assert "documents" in DocumentSource.__abstractmethods__
        assert "stamps" in DocumentSource.__abstractmethods__
        with pytest.raises(TypeError):
            DocumentSource()

    def test_source_error_is_search_error(self):
        assert issubclass(SourceError, SearchError)


class TestMemorySource:
    """Test the in-memory source."""

    def test_documents(self, memory_source, corpus):
        documents = list(memory_source.documents())
        assert [d.name for d in documents] == list(corpus)
        assert all(isinstance(d, SourceDocument) for d in documents)
        assert documents[0].text == corpus["gatos.txt"]

    def test_read(self, memory_source, corpus):
        assert memory_source.read("viajes.txt") == corpus["viajes.txt"]

    def test_read_unknown(self, memory_source):
        with pytest.raises(SourceError, match="Unknown document"):
            memory_source.read("nada.txt")

    def test_add(self):
        source = MemorySource()
        source.add("a.txt", "uno dos")
        assert len(source) == 1
        assert source.read("a.txt") == "uno dos"

    def test_fingerprint_is_stable(self, corpus):
        assert MemorySource(corpus).fingerprint() == MemorySource(corpus).fingerprint()

    def test_fingerprint_tracks_changes(self, corpus):
        source = MemorySource(corpus)
        before = source.fingerprint()
        source.add("gatos.txt", "texto distinto")
        assert source.fingerprint() != before

    def test_fingerprint_ignores_order(self):
        first = MemorySource({"a": "uno", "b": "dos"})
        second = MemorySource({"b": "dos", "a": "uno"})
        assert first.fingerprint() == second.fingerprint()


class TestFileSystemSource:
    """Test the directory-backed source."""

    def test_documents_sorted(self, content_dir, corpus):
        source = FileSystemSource(content_dir)
        names = [d.name for d in source.documents()]
        assert names == [str(content_dir / name) for name in sorted(corpus)]

    def test_only_matching_files(self, content_dir):
        (content_dir / "notas.md").write_text("ignorado", encoding="utf-8")
        (content_dir / "sub.txt").mkdir()
        source = FileSystemSource(content_dir)
        assert all(d.name.endswith(".txt") for d in source.documents())
        assert len(source.stamps()) == 5

    def test_read(self, content_dir, corpus):
        source = FileSystemSource(content_dir)
        assert source.read(str(content_dir / "cocina.txt")) == corpus["cocina.txt"]

    def test_invalid_utf8_is_replaced(self, tmp_path):
        (tmp_path / "roto.txt").write_bytes(b"caf\xe9 con leche")
        source = FileSystemSource(tmp_path)
        text = next(source.documents()).text
        assert text.startswith("caf")
        assert text.endswith("con leche")

    def test_missing_directory(self, tmp_path):
        source = FileSystemSource(tmp_path / "missing")
        with pytest.raises(SourceError, match="not found"):
            list(source.documents())

    def test_fingerprint_tracks_mtime(self, content_dir):
        source = FileSystemSource(content_dir)
        before = source.fingerprint()

        path = content_dir / "musica.txt"
        stat = path.stat()
        os.utime(path, (stat.st_atime, stat.st_mtime + 10))

        assert source.fingerprint() != before

    def test_fingerprint_tracks_new_file(self, content_dir):
        source = FileSystemSource(content_dir)
        before = source.fingerprint()
        (content_dir / "nuevo.txt").write_text("nuevo documento", encoding="utf-8")
        assert source.fingerprint() != before
