"""Pytest configuration and fixtures for CLI tests."""

import pytest
from click.testing import CliRunner


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def cli_runner(content_dir, cache_dir):
    """Click CLI test runner pointed at the test corpus."""

    class LexSearchCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            """Invoke the CLI with the corpus and cache directories prepended."""
            from lexsearch.cli.main import cli

            base = ["--content-dir", str(content_dir), "--cache-dir", str(cache_dir)]
            return super().invoke(cli, base + list(args), **kwargs)

    return LexSearchCliRunner()


@pytest.fixture
def bare_runner():
    """Click CLI test runner without any directory options."""
    return CliRunner()
