"""Tests for snippet extraction."""

import pytest

from lexsearch.backends import MemorySource
from lexsearch.highlighting import SnippetGenerator
from lexsearch.index import InvertedIndex
from lexsearch.indexing.synonyms import SynonymTable
from lexsearch.query import QueryExpander, QueryParser


def filler(count, start=0):
    return [f"relleno{i}" for i in range(start, start + count)]


def build(words, size=10):
    index = InvertedIndex.build(
        MemorySource({"largo": " ".join(words), "corto": "otro documento"})
    )
    return index, SnippetGenerator(index, snippet_size=size)


def make_query(index, text):
    expander = QueryExpander(index, synonyms=SynonymTable.empty())
    return expander.expand(QueryParser().parse(text))


class TestSnippetGenerator:
    """Test window selection and padding."""

    def test_short_document_returned_whole(self, index, corpus):
        generator = SnippetGenerator(index)
        query = make_query(index, "gato")
        assert generator.snippet("gatos.txt", query) == corpus["gatos.txt"]

    def test_window_centered_on_match(self):
        words = filler(200)
        words[150] = "tesoro"
        index, generator = build(words)

        start, end = generator.window("largo", make_query(index, "tesoro"))

        assert (start, end) == (146, 156)

    def test_window_clipped_at_document_end(self):
        words = filler(200)
        words[198] = "tesoro"
        index, generator = build(words)

        assert generator.window("largo", make_query(index, "tesoro")) == (190, 200)

    def test_window_clipped_at_document_start(self):
        words = filler(200)
        words[1] = "tesoro"
        index, generator = build(words)

        assert generator.window("largo", make_query(index, "tesoro")) == (0, 10)

    def test_prefers_window_covering_more_terms(self):
        words = filler(200)
        words[20] = "tesoro"
        words[100] = "tesoro"
        words[103] = "mapa"
        index, generator = build(words)

        start, end = generator.window("largo", make_query(index, "tesoro mapa"))

        assert start <= 100 and end > 103
        assert end - start == 10

    def test_no_relevant_positions(self):
        index, generator = build(filler(50))
        query = make_query(index, "inexistente")
        assert generator.window("largo", query) == (0, 10)
        assert generator.snippet("largo", query) == " ".join(filler(10))

    @pytest.mark.parametrize("position", [0, 7, 25, 49])
    def test_length_is_exactly_size(self, position):
        words = filler(50)
        words[position] = "tesoro"
        index, generator = build(words)

        snippet = generator.snippet("largo", make_query(index, "tesoro"))

        assert len(snippet.split()) == 10
        assert "tesoro" in snippet

    def test_original_case_kept(self):
        words = filler(50)
        words[30] = "TESORO,"
        index, generator = build(words)

        snippet = generator.snippet("largo", make_query(index, "tesoro"))

        assert "TESORO," in snippet.split()

    def test_invalid_size(self, index):
        with pytest.raises(ValueError):
            SnippetGenerator(index, snippet_size=0)
