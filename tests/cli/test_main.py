"""Tests for main CLI entry point and application setup."""

import click

from lexsearch.backends import SourceError
from lexsearch.cli.main import Context, cli, create_console


class TestCLIEntryPoint:
    """Test the main CLI entry point."""

    def test_no_command_shows_help(self, bare_runner):
        result = bare_runner.invoke(cli, [])

        assert result.exit_code in (0, 2)
        assert "Lexical search" in result.output
        assert "Commands:" in result.output

    def test_version_flag(self, bare_runner):
        result = bare_runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "lexsearch version 1.0.0" in result.output

    def test_help_lists_commands(self, bare_runner):
        result = bare_runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "search" in result.output
        assert "index" in result.output
        assert "--content-dir" in result.output


class TestConfiguration:
    """Test global options and configuration files."""

    def test_config_file(self, bare_runner, content_dir, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text(
            f"content_dir: {content_dir}\ncache_dir: {tmp_path / 'cache'}\n",
            encoding="utf-8",
        )

        result = bare_runner.invoke(cli, ["--config", str(config), "search", "perro"])

        assert result.exit_code == 0
        assert "perros.txt" in result.output

    def test_invalid_config_file(self, bare_runner, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("invalid: [yaml\n", encoding="utf-8")

        result = bare_runner.invoke(cli, ["--config", str(config), "search", "perro"])

        assert result.exit_code == 1
        assert "Error loading configuration" in result.output

    def test_environment_content_dir(self, bare_runner, content_dir, tmp_path, monkeypatch):
        monkeypatch.setenv("LEXSEARCH_CONTENT_DIR", str(content_dir))
        monkeypatch.setenv("LEXSEARCH_CACHE_DIR", str(tmp_path / "cache"))

        result = bare_runner.invoke(cli, ["search", "guitarra"])

        assert result.exit_code == 0
        assert "musica.txt" in result.output

    def test_context_initialization(self, cli_runner):
        @cli.command("check-context")
        @click.pass_context
        def check_context(ctx):
            assert isinstance(ctx.obj, Context)
            assert ctx.obj.console is not None
            assert ctx.obj.settings.result_limit == 10
            click.echo("Context OK")

        try:
            result = cli_runner.invoke(["check-context"])
        finally:
            cli.commands.pop("check-context", None)

        assert result.exit_code == 0
        assert "Context OK" in result.output


class TestErrorHandling:
    """Test top-level error handling."""

    def test_missing_content_dir(self, bare_runner, tmp_path):
        result = bare_runner.invoke(
            cli, ["--content-dir", str(tmp_path / "missing"), "search", "gato"]
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "not found" in result.output

    def test_debug_propagates(self, bare_runner, tmp_path):
        result = bare_runner.invoke(
            cli,
            ["--debug", "--content-dir", str(tmp_path / "missing"), "search", "gato"],
        )

        assert result.exit_code == 1
        assert isinstance(result.exception, SourceError)


def test_create_console():
    console = create_console(no_color=True, width=80)
    assert console.width == 80
    assert console.no_color
