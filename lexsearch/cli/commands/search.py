"""Search and index CLI commands."""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from lexsearch.models import SearchResult


@click.command()
@click.argument("query", required=True)
@click.option("--limit", "-n", type=click.IntRange(min=1), help="Maximum results to show")
@click.option("--no-snippets", is_flag=True, help="Hide result snippets")
@click.pass_context
def search(ctx: click.Context, query: str, limit: int | None, no_snippets: bool) -> None:
    """Search the documents.

    Supports query operators:
    - Exclusion: !term
    - Inclusion: ^term
    - Priority: *term, **term
    - Proximity: term ~ other, a ~~ b ~~ c
    """
    console = ctx.obj.console
    engine = ctx.obj.get_engine()

    results = engine.search(query, limit=limit)
    _display_results(console, results, show_snippets=not no_snippets)


@click.command()
@click.option("--rebuild", is_flag=True, help="Ignore the cached index")
@click.pass_context
def index(ctx: click.Context, rebuild: bool) -> None:
    """Build or restore the index and show statistics."""
    console = ctx.obj.console
    engine = ctx.obj.get_engine(rebuild=rebuild)
    stats = engine.get_statistics()

    table = Table(title="Index Statistics", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Documents", str(stats["total_documents"]))
    table.add_row("Terms", str(stats["total_terms"]))
    table.add_row("Tokens", str(stats["total_tokens"]))
    table.add_row("Stop words", str(stats["stop_words"]))
    table.add_row("Cached stems", str(stats["cached_stems"]))
    table.add_row("Source", "rebuilt" if stats["changed"] else "cache")
    console.print(table)


def _display_results(
    console: Console, results: SearchResult, show_snippets: bool = True
) -> None:
    if results.is_empty:
        console.print(f"[yellow]No results found for '{escape(results.query)}'[/yellow]")
    else:
        table = Table(
            title=f"Results for '{escape(results.query)}'",
            caption=f"{len(results)} results in {results.search_time_ms:.1f} ms",
            show_lines=show_snippets,
        )
        table.add_column("#", style="dim", width=3)
        table.add_column("Document", style="cyan", no_wrap=True)
        table.add_column("Score", justify="right", style="green")
        if show_snippets:
            table.add_column("Snippet")

        for rank, item in enumerate(results.items, 1):
            row = [str(rank), escape(item.title), f"{item.score:.4f}"]
            if show_snippets:
                row.append(escape(item.snippet))
            table.add_row(*row)

        console.print(table)

    if results.suggestion and results.suggestion != results.query.strip().lower():
        console.print(
            Panel(
                f"Did you mean: [bold]{escape(results.suggestion)}[/bold]",
                border_style="blue",
                expand=False,
            )
        )
