"""Tests for the search and index commands."""


class TestSearchCommand:
    """Test the search command."""

    def test_search_shows_results(self, cli_runner):
        result = cli_runner.invoke(["search", "gato negro"])

        assert result.exit_code == 0
        assert "gatos.txt" in result.output
        assert "Results for" in result.output

    def test_search_no_results(self, cli_runner):
        result = cli_runner.invoke(["search", "xilófono"])

        assert result.exit_code == 0
        assert "No results found" in result.output

    def test_search_suggestion(self, cli_runner):
        result = cli_runner.invoke(["search", "gatp"])

        assert result.exit_code == 0
        assert "Did you mean" in result.output
        assert "gato" in result.output

    def test_no_suggestion_when_unchanged(self, cli_runner):
        result = cli_runner.invoke(["search", "guitarra"])

        assert result.exit_code == 0
        assert "Did you mean" not in result.output

    def test_limit(self, cli_runner):
        result = cli_runner.invoke(["search", "casa", "--limit", "1"])

        assert result.exit_code == 0
        assert "1 results" in result.output

    def test_invalid_limit(self, cli_runner):
        result = cli_runner.invoke(["search", "casa", "--limit", "0"])
        assert result.exit_code == 2

    def test_no_snippets(self, cli_runner):
        result = cli_runner.invoke(["search", "guitarra", "--no-snippets"])

        assert result.exit_code == 0
        assert "musica.txt" in result.output
        assert "domingo" not in result.output

    def test_operators(self, cli_runner):
        result = cli_runner.invoke(["search", "casa !perro"])

        assert result.exit_code == 0
        assert "gatos.txt" in result.output
        assert "perros.txt" not in result.output

    def test_bracketed_text_printed_literally(self, cli_runner, content_dir):
        (content_dir / "notas.txt").write_text(
            "El zorro [/b] duerme [bold] tranquilo", encoding="utf-8"
        )

        result = cli_runner.invoke(["search", "zorro"])

        assert result.exit_code == 0
        assert "notas.txt" in result.output
        assert "[/b]" in result.output
        assert "[bold]" in result.output

    def test_bracketed_query(self, cli_runner):
        result = cli_runner.invoke(["search", "[/i]"])
        assert result.exit_code == 0

    def test_missing_query(self, cli_runner):
        result = cli_runner.invoke(["search"])
        assert result.exit_code == 2


class TestIndexCommand:
    """Test the index command."""

    def test_first_run_builds(self, cli_runner, cache_dir):
        result = cli_runner.invoke(["index"])

        assert result.exit_code == 0
        assert "Index Statistics" in result.output
        assert "rebuilt" in result.output
        assert (cache_dir / "index.json").exists()

    def test_second_run_uses_cache(self, cli_runner):
        cli_runner.invoke(["index"])
        result = cli_runner.invoke(["index"])

        assert result.exit_code == 0
        assert "cache" in result.output
        assert "rebuilt" not in result.output

    def test_rebuild(self, cli_runner):
        cli_runner.invoke(["index"])
        result = cli_runner.invoke(["index", "--rebuild"])

        assert result.exit_code == 0
        assert "rebuilt" in result.output

    def test_document_count(self, cli_runner):
        result = cli_runner.invoke(["index"])

        assert "Documents" in result.output
        assert "5" in result.output
