"""Pytest configuration and fixtures."""

import os

import pytest

from lexsearch.backends import MemorySource
from lexsearch.index import InvertedIndex
from lexsearch.indexing.synonyms import SynonymTable

# "la" is the only term present in every document, so it is the only stop word.
SPANISH_CORPUS = {
    "gatos.txt": (
        "El gato negro duerme en la casa. "
        "Los gatos cazan ratones por la noche."
    ),
    "perros.txt": "El perro ladra en el jardín. Un perro fiel cuida la casa.",
    "cocina.txt": "La receta de la abuela lleva tomate, cebolla y ajo.",
    "viajes.txt": "Viajar por la montaña requiere botas y agua.",
    "musica.txt": "La guitarra suena en la plaza cada domingo.",
}


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables for each test.

    Config lookups and the working directory are pointed at the test's
    temporary directory so a developer's own configuration never leaks in.
    """
    original_env = os.environ.copy()
    for name in ("LEXSEARCH_CONTENT_DIR", "LEXSEARCH_CACHE_DIR", "LEXSEARCH_SYNONYMS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def corpus() -> dict[str, str]:
    """Small Spanish corpus keyed by document name."""
    return dict(SPANISH_CORPUS)


@pytest.fixture
def memory_source(corpus) -> MemorySource:
    return MemorySource(corpus)


@pytest.fixture
def index(memory_source) -> InvertedIndex:
    """Index over the Spanish corpus."""
    return InvertedIndex.build(memory_source)


@pytest.fixture
def no_synonyms() -> SynonymTable:
    return SynonymTable.empty()


@pytest.fixture
def content_dir(tmp_path, corpus):
    """Directory holding the Spanish corpus as .txt files."""
    directory = tmp_path / "content"
    directory.mkdir()
    for name, text in corpus.items():
        (directory / name).write_text(text, encoding="utf-8")
    return directory
