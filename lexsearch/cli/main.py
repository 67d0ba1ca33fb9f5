"""Main CLI entry point and application setup."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import click
from click.exceptions import Exit
from rich.console import Console

from lexsearch import __version__
from lexsearch.cli.commands import search
from lexsearch.config import SearchSettings, load_settings
from lexsearch.engine import SearchEngine, create_engine

logger = logging.getLogger(__name__)


@dataclass
class Context:
    """CLI context that holds shared resources."""

    settings: SearchSettings
    console: Console
    debug: bool = False
    _engine: SearchEngine | None = field(default=None, repr=False)

    def get_engine(self, rebuild: bool = False) -> SearchEngine:
        """Build or restore the engine on first use."""
        if self._engine is None or rebuild:
            self._engine = create_engine(self.settings, rebuild=rebuild)
        return self._engine


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.ERROR
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


class LexSearchGroup(click.Group):
    """Custom group that reports errors without tracebacks."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {e}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=LexSearchGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--content-dir",
    "-d",
    type=click.Path(path_type=Path),
    help="Directory of .txt documents to search",
)
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path),
    help="Directory for the index cache",
)
@click.version_option(
    version=__version__, prog_name="lexsearch", message="lexsearch version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config: Path | None,
    content_dir: Path | None,
    cache_dir: Path | None,
) -> None:
    """Lexical search over a directory of plain text documents.

    Queries support operators: !term excludes, ^term requires, *term boosts,
    a ~ b and a ~~ b ~~ c ask for terms close together.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)
    console = create_console(no_color=no_color)

    try:
        settings = load_settings(config, content_dir=content_dir, cache_dir=cache_dir)
    except ValueError as e:
        if debug:
            raise
        console.print(f"[red]Error loading configuration:[/red] {e}")
        ctx.exit(1)

    logger.debug(f"Using settings {settings}")
    ctx.obj = Context(settings=settings, console=console, debug=debug)


cli.add_command(search.search)
cli.add_command(search.index)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
